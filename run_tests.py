#!/usr/bin/env python3
import pytest
import sys
import os

def main():
    """Run the oneshot_tcp test suite with a coverage report."""
    # Tests import oneshot_tcp from the checkout, not an installed copy
    project_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, project_root)
    
    args = [
        "--verbose",
        "--cov=oneshot_tcp",
        "--cov-report=term-missing",
        "tests/",
    ]
    # Pass through extra pytest options, e.g. -k or -x
    args.extend(sys.argv[1:])
    
    return pytest.main(args)

if __name__ == "__main__":
    sys.exit(main())
