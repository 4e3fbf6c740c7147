import socket
import sys
import logging
from typing import Optional, TextIO

from oneshot_tcp.config import BUFFER_SIZE
from .protocol import (
    MessageSizeError,
    SocketCallError,
    socket_call,
    encode_message,
    decode_message,
    receive_frame,
    send_frame
)

class OneShotClient:
    """TCP client that sends one line to a server and prints the single reply."""

    def __init__(self, host: str, port: int, buffer_size: int = BUFFER_SIZE,
                 stdin: Optional[TextIO] = None, out: Optional[TextIO] = None):
        self.host = host
        self.port = port
        self.buffer_size = buffer_size
        self.stdin = stdin
        self.out = out
        self.sock: Optional[socket.socket] = None
        self.sent = b""
        self.response: Optional[str] = None
        self.logger = logging.getLogger(__name__)

    def _say(self, text: str, end: str = "\n") -> None:
        print(text, end=end, file=self.out or sys.stdout, flush=True)

    def connect(self) -> None:
        """Open a stream socket and make a single connection attempt."""
        with socket_call("socket"):
            self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        self.logger.debug(f"Connecting to {self.host}:{self.port}")
        with socket_call("connect"):
            self.sock.connect((self.host, self.port))

        self._say(f"Connected to server at {self.host}:{self.port}")

    def read_message(self) -> str:
        """Prompt the operator and read one line, without its newline."""
        self._say("Enter a message to send: ", end="")
        line = (self.stdin or sys.stdin).readline()
        return line.rstrip("\r\n")

    def send_message(self, text: Optional[str] = None) -> int:
        """Send one message (read from the operator unless given) with its terminator.

        Raises MessageSizeError before anything is sent if the text does not
        fit in the server's buffer.
        """
        if self.sock is None:
            raise RuntimeError("Client is not connected")

        if text is None:
            text = self.read_message()
        # The terminator ends the message, anything after it is dropped
        text = text.partition("\0")[0]

        frame = encode_message(text)
        self._say(f"You are sending '{text}'")
        self._say(f"The length of the string is {len(frame) - 1} bytes")

        with socket_call("send"):
            sent = send_frame(self.sock, frame)

        self.sent = frame
        self._say(f"Sent {sent} bytes to the server")
        return sent

    def receive_response(self) -> Optional[str]:
        """Wait for the server's reply. Returns None if the server closed without one."""
        if self.sock is None:
            raise RuntimeError("Client is not connected")

        with socket_call("recv"):
            data = receive_frame(self.sock, self.buffer_size)

        if not data:
            self._say("Server closed the connection without responding.")
            return None

        self.response = decode_message(data)
        self._say(f"Server response: {self.response}")
        return self.response

    def cleanup(self) -> None:
        if self.sock is not None:
            self.sock.close()
            self.logger.debug("Closed client socket")
            self.sock = None
            self._say("Connection closed.")

    def run(self, text: Optional[str] = None) -> int:
        """Connect, send, wait for the reply and close. Returns the exit status."""
        try:
            self.connect()
            self.send_message(text)
            self.receive_response()
            return 0
        except SocketCallError as e:
            self.logger.error(f"Error: {e}")
            return 1
        except MessageSizeError as e:
            self.logger.error(f"Error: {e}")
            return 1
        except KeyboardInterrupt:
            self.logger.warning("Interrupted, closing connection")
            return 1
        finally:
            self.cleanup()
