from dataclasses import dataclass

from oneshot_tcp.config import DEFAULT_HOST, MIN_PORT, MAX_PORT

class InvalidPortError(ValueError):
    """Raised when a port argument is not a valid TCP port."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f"Invalid port number '{token}'. Must be between {MIN_PORT} and {MAX_PORT}."
        )

@dataclass(frozen=True)
class Endpoint:
    """A validated host and port pair."""
    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

def parse_port(token: str) -> int:
    """Parse a command-line port token.

    Only plain decimal digits are accepted, so values like "12abc", "-1",
    "0x50" or "" are rejected along with anything outside the port range.
    """
    digits = token.strip()
    if not digits.isdecimal() or not digits.isascii():
        raise InvalidPortError(token)
    port = int(digits)
    if port < MIN_PORT or port > MAX_PORT:
        raise InvalidPortError(token)
    return port

def resolve_endpoint(host: str, port_token: str) -> Endpoint:
    return Endpoint(host=host, port=parse_port(port_token))

def wildcard_endpoint(port_token: str) -> Endpoint:
    return Endpoint(host=DEFAULT_HOST, port=parse_port(port_token))
