import sys
import argparse
from typing import List, NoReturn, Optional

from oneshot_tcp.network.address import InvalidPortError, resolve_endpoint, wildcard_endpoint
from oneshot_tcp.network.server import OneShotServer
from oneshot_tcp.network.client import OneShotClient
from oneshot_tcp.utils.logging_config import setup_logging, get_logger

class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def __init__(self, *args, usage_line: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.usage_line = usage_line

    def error(self, message: str) -> NoReturn:
        usage = f"{self.usage_line}\n" if self.usage_line else ""
        self.exit(1, f"{usage}{self.prog}: error: {message}\n")

    def parse_command_line(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse arguments. Extra positional arguments are ignored, unknown options are errors."""
        args, extras = self.parse_known_args(argv)
        unknown = [arg for arg in extras if arg.startswith("-")]
        if unknown:
            self.error(f"unrecognized arguments: {' '.join(unknown)}")
        return args

def _add_logging_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("--log-dir", metavar="DIR", help="Also write a rotating log file to DIR")

def build_server_parser() -> UsageArgumentParser:
    parser = UsageArgumentParser(
        prog="server",
        description="Accept one TCP client, read one message and acknowledge it",
        usage_line="usage is: server <portnumber>"
    )
    parser.add_argument("port", help="Port to listen on (1-65535)")
    _add_logging_options(parser)
    return parser

def build_client_parser() -> UsageArgumentParser:
    parser = UsageArgumentParser(
        prog="client",
        description="Send one line to a TCP server and print its reply",
        usage_line="usage is: client <ipaddr> <portnumber>"
    )
    parser.add_argument("ipaddr", help="Server address")
    parser.add_argument("port", help="Server port (1-65535)")
    _add_logging_options(parser)
    return parser

def server_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the server program."""
    args = build_server_parser().parse_command_line(argv)
    try:
        endpoint = wildcard_endpoint(args.port)
    except InvalidPortError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_dir, args.verbose)
    logger = get_logger("oneshot_tcp.server")
    logger.debug(f"Starting server on {endpoint}")

    server = OneShotServer(endpoint.port, host=endpoint.host)
    return server.run()

def client_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the client program."""
    args = build_client_parser().parse_command_line(argv)
    try:
        endpoint = resolve_endpoint(args.ipaddr, args.port)
    except InvalidPortError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_dir, args.verbose)
    logger = get_logger("oneshot_tcp.client")
    logger.debug(f"Starting client for {endpoint}")

    client = OneShotClient(endpoint.host, endpoint.port)
    return client.run()

def run_server() -> NoReturn:
    sys.exit(server_main())

def run_client() -> NoReturn:
    sys.exit(client_main())
