"""
Demonstrations for opening an outbound TCP connection through various socket APIs.
"""
import asyncio
import os
import selectors
import socket
from typing import List

from protected_access.config import settings
from protected_access.services.base import ProtectedResourceAccess
from protected_access.services.loopback import LoopbackTcpAcceptServer


class NetworkSystemConnectAccess(ProtectedResourceAccess):
    """Connects to a loopback accept server with one of six socket APIs."""

    AMOUNT_OF_METHODS = 6

    SUCCESS_TEMPLATE = "Successfully connected to {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to connect to {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        # Port 0: every operation binds its own ephemeral port
        return [settings.loopback_host, "0"]

    def operations(self):
        return (
            self.connect_with_create_connection,
            self.connect_with_socket_connect,
            self.connect_with_connect_ex,
            self.connect_with_getaddrinfo,
            self.connect_with_asyncio,
            self.connect_with_selector,
        )

    def _connect(self, resource: str, description: str, connect) -> str:
        with LoopbackTcpAcceptServer("connect-server") as server:
            connect(server.host, server.port)
            self.await_event(server.done, "loopback connect server")
            return self.success(resource, self.describe_port(description, server.port))

    def connect_with_create_connection(self, resource: str) -> str:
        def connect(host, port):
            with socket.create_connection((host, port), timeout=settings.loopback_timeout_seconds):
                pass

        return self._connect(resource, "socket.create_connection", connect)

    def connect_with_socket_connect(self, resource: str) -> str:
        def connect(host, port):
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.settimeout(settings.loopback_timeout_seconds)
                sock.connect((host, port))

        return self._connect(resource, "socket.connect", connect)

    def connect_with_connect_ex(self, resource: str) -> str:
        def connect(host, port):
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.settimeout(settings.loopback_timeout_seconds)
                error = sock.connect_ex((host, port))
                if error:
                    raise OSError(error, os.strerror(error))

        return self._connect(resource, "socket.connect_ex", connect)

    def connect_with_getaddrinfo(self, resource: str) -> str:
        def connect(host, port):
            family, kind, proto, _, address = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)[0]
            with socket.socket(family, kind, proto) as sock:
                sock.settimeout(settings.loopback_timeout_seconds)
                sock.connect(address)

        return self._connect(resource, "socket.getaddrinfo", connect)

    def connect_with_asyncio(self, resource: str) -> str:
        async def open_and_close(host, port):
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), settings.loopback_timeout_seconds
            )
            writer.close()
            await writer.wait_closed()

        def connect(host, port):
            asyncio.run(open_and_close(host, port))

        return self._connect(resource, "asyncio.open_connection", connect)

    def connect_with_selector(self, resource: str) -> str:
        def connect(host, port):
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock, selectors.DefaultSelector() as selector:
                sock.setblocking(False)
                sock.connect_ex((host, port))
                selector.register(sock, selectors.EVENT_WRITE)
                if not selector.select(settings.loopback_timeout_seconds):
                    raise TimeoutError(f"Timed out connecting to {host}:{port}")
                error = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
                if error:
                    raise OSError(error, os.strerror(error))

        return self._connect(resource, "selectors non-blocking connect", connect)
