import socket
import sys
import logging
from typing import Optional, TextIO, Tuple

from oneshot_tcp.config import DEFAULT_HOST, BACKLOG, BUFFER_SIZE, RESPONSE
from .protocol import (
    MessageSizeError,
    SocketCallError,
    socket_call,
    encode_message,
    decode_message,
    receive_frame,
    send_frame
)

class OneShotServer:
    """TCP server that accepts one client, reads one message and acknowledges it.

    The sequence is strictly linear: listen, accept, receive, respond, close.
    Every socket opened along the way is closed by cleanup(), whichever
    step failed.
    """

    def __init__(self, port: int, host: str = DEFAULT_HOST, backlog: int = BACKLOG,
                 buffer_size: int = BUFFER_SIZE, response: str = RESPONSE,
                 out: Optional[TextIO] = None):
        self.host = host
        self._port = port
        self.backlog = backlog
        self.buffer_size = buffer_size
        self.response = response
        self.out = out
        self.server_sock: Optional[socket.socket] = None
        self.client_sock: Optional[socket.socket] = None
        self.client_address: Optional[Tuple[str, int]] = None
        self.received = b""
        self.message: Optional[str] = None
        self.response_sent = False
        self.logger = logging.getLogger(__name__)

    @property
    def port(self) -> int:
        """Port the server is bound to (the OS-assigned one when created with port 0)."""
        if self.server_sock is not None and self.server_sock.fileno() != -1:
            return self.server_sock.getsockname()[1]
        return self._port

    def _say(self, text: str) -> None:
        print(text, file=self.out or sys.stdout, flush=True)

    def listen(self) -> None:
        """Create the listening socket: socket, SO_REUSEADDR, bind, listen."""
        with socket_call("socket"):
            self.server_sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.logger.debug(f"Created server socket fd={self.server_sock.fileno()}")

        with socket_call("setsockopt"):
            self.server_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        with socket_call("bind"):
            self.server_sock.bind((self.host, self._port))
        self.logger.debug(f"Bound to {self.host}:{self.port}")

        with socket_call("listen"):
            self.server_sock.listen(self.backlog)

        self._say(f"Server is listening on port {self.port}...")

    def accept_client(self) -> Tuple[str, int]:
        """Block until exactly one client connects."""
        if self.server_sock is None:
            raise RuntimeError("Server socket is not listening")

        self._say("Waiting for a client to connect...")
        with socket_call("accept"):
            self.client_sock, self.client_address = self.server_sock.accept()

        host, port = self.client_address[0], self.client_address[1]
        self._say(f"Client connected successfully from {host}:{port}")
        return self.client_address

    def receive_message(self) -> int:
        """Receive one message from the client.

        Returns the number of bytes received, terminator included. Zero means
        the client disconnected without sending anything.
        """
        if self.client_sock is None:
            raise RuntimeError("No client connected")

        with socket_call("recv"):
            data = receive_frame(self.client_sock, self.buffer_size)

        if not data:
            self._say("Client disconnected before sending data.")
            return 0

        self.received = data
        self.message = decode_message(data)
        self._say(f"Received {len(data)} bytes")
        self._say(f"Message: {self.message}")
        return len(data)

    def send_response(self) -> int:
        """Send the fixed acknowledgement back to the client."""
        if self.client_sock is None:
            raise RuntimeError("No client connected")

        frame = encode_message(self.response)
        with socket_call("send"):
            sent = send_frame(self.client_sock, frame)

        self.response_sent = True
        self._say(f"Response sent: {self.response}")
        return sent

    def cleanup(self) -> None:
        """Close every socket this server opened. Safe to call more than once."""
        if self.client_sock is not None:
            self.client_sock.close()
            self.logger.debug("Closed client socket")
            self.client_sock = None
        if self.server_sock is not None:
            self.server_sock.close()
            self.logger.debug("Closed server socket")
            self.server_sock = None
        self._say("Server shut down. All sockets closed.")

    def run(self) -> int:
        """Run the whole exchange and return the process exit status."""
        try:
            if self.server_sock is None:
                self.listen()
            self.accept_client()
            if self.receive_message() > 0:
                self.send_response()
            return 0
        except SocketCallError as e:
            self.logger.error(f"Error: {e}")
            return 1
        except MessageSizeError as e:
            self.logger.error(f"Error: {e}")
            return 1
        except KeyboardInterrupt:
            self.logger.warning("Interrupted, shutting down")
            return 1
        finally:
            self.cleanup()
