"""
Single-use loopback TCP/UDP servers giving the network demonstrations a peer.

Each server binds an ephemeral port on the loopback host, handles exactly one
exchange on a daemon thread and sets ``done`` once that exchange is over.
"""
import logging
import socket
import threading
from abc import ABC, abstractmethod

from protected_access.config import settings

logger = logging.getLogger(__name__)


class _LoopbackServer(ABC):
    """Common lifecycle of the loopback fixtures."""

    def __init__(self, sock: socket.socket, thread_name: str):
        self.sock = sock
        self.sock.settimeout(settings.loopback_timeout_seconds)
        self.done = threading.Event()
        self._thread = threading.Thread(target=self._run, name=thread_name, daemon=True)

    def start(self):
        self._thread.start()
        return self

    def _run(self):
        try:
            self.serve()
        except OSError as e:
            logger.debug(f"{self._thread.name} stopped: {e}")
        finally:
            self.done.set()

    @abstractmethod
    def serve(self):
        """Handle the single exchange on the server thread."""

    @property
    def host(self) -> str:
        return self.sock.getsockname()[0]

    @property
    def port(self) -> int:
        return self.sock.getsockname()[1]

    def close(self):
        self.sock.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class LoopbackTcpAcceptServer(_LoopbackServer):
    """Accepts one connection and drains it until the client closes."""

    def __init__(self, thread_name: str = "tcp-accept-server"):
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.bind((settings.loopback_host, 0))
        sock.listen(1)
        super().__init__(sock, thread_name)
        self.received = bytearray()
        self.start()

    def serve(self):
        conn, _ = self.sock.accept()
        with conn:
            conn.settimeout(settings.loopback_timeout_seconds)
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                self.received.extend(chunk)


class LoopbackTcpPayloadServer(_LoopbackServer):
    """Accepts one connection, sends the payload and closes the write side."""

    def __init__(self, payload: bytes, thread_name: str = "tcp-receive-server"):
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.bind((settings.loopback_host, 0))
        sock.listen(1)
        super().__init__(sock, thread_name)
        self.payload = bytes(payload)
        self.start()

    def serve(self):
        conn, _ = self.sock.accept()
        with conn:
            conn.sendall(self.payload)
            conn.shutdown(socket.SHUT_WR)


class LoopbackUdpSinkServer(_LoopbackServer):
    """Receives a single datagram."""

    def __init__(self, payload_size: int, thread_name: str = "udp-send-server"):
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.bind((settings.loopback_host, 0))
        super().__init__(sock, thread_name)
        self.payload_size = payload_size
        self.received = b""
        self.start()

    def serve(self):
        self.received, _ = self.sock.recvfrom(self.payload_size)


class LoopbackUdpPayloadServer(_LoopbackServer):
    """Answers a one-byte registration datagram with the payload."""

    def __init__(self, payload: bytes, thread_name: str = "udp-receive-server"):
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.bind((settings.loopback_host, 0))
        super().__init__(sock, thread_name)
        self.payload = bytes(payload)
        self.start()

    def serve(self):
        _, address = self.sock.recvfrom(1)
        self.sock.sendto(self.payload, address)
