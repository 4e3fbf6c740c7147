#!/usr/bin/env python3
import sys
import os

if __name__ == "__main__":
    # Add the project root to Python path
    project_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, project_root)

    from oneshot_tcp.main import server_main

    # Run the server
    sys.exit(server_main())
