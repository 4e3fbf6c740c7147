import socket
import logging
from contextlib import contextmanager
from typing import Iterator

from oneshot_tcp.config import BUFFER_SIZE, MAX_PAYLOAD_SIZE, TERMINATOR, ENCODING

logger = logging.getLogger(__name__)

class ProtocolError(Exception):
    """Base class for protocol-related errors."""
    pass

class MessageSizeError(ProtocolError):
    """Raised when a message does not fit in the message buffer."""
    pass

class SocketCallError(OSError):
    """An OS-level socket call failed; carries the name of the call."""

    def __init__(self, call: str, error: OSError):
        super().__init__(error.errno, error.strerror or str(error))
        self.call = call
        self.error = error

    def __str__(self) -> str:
        return f"{self.call}() failed: {self.error}"

@contextmanager
def socket_call(call: str) -> Iterator[None]:
    """Re-raise any OSError raised in the block as SocketCallError."""
    try:
        yield
    except SocketCallError:
        raise
    except OSError as e:
        raise SocketCallError(call, e) from e

def encode_message(text: str) -> bytes:
    """Encode text as a single null-terminated frame."""
    payload = text.encode(ENCODING)
    if len(payload) > MAX_PAYLOAD_SIZE:
        raise MessageSizeError(
            f"Message is {len(payload)} bytes, the limit is {MAX_PAYLOAD_SIZE} bytes"
        )
    logger.debug(f"Encoded frame of {len(payload) + 1} bytes")
    return payload + TERMINATOR

def decode_message(data: bytes) -> str:
    """Decode a frame, stopping at the first terminator."""
    payload, _, _ = data.partition(TERMINATOR)
    return payload.decode(ENCODING, errors="replace")

def receive_frame(sock: socket.socket, capacity: int = BUFFER_SIZE) -> bytes:
    """Read one frame with a single recv.

    At most ``capacity - 1`` bytes are read. An empty result means the peer
    closed the connection without sending anything. A read that fills the
    whole window without a terminator raises MessageSizeError.
    """
    window = capacity - 1
    data = sock.recv(window)
    logger.debug(f"recv() returned {len(data)} bytes")
    if len(data) == window and TERMINATOR not in data:
        raise MessageSizeError(
            f"Message exceeds the {capacity}-byte buffer"
        )
    return data

def send_frame(sock: socket.socket, frame: bytes) -> int:
    """Send a whole frame and return the number of bytes sent."""
    sock.sendall(frame)
    logger.debug(f"send() wrote {len(frame)} bytes")
    return len(frame)
