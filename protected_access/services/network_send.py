"""
Demonstrations for sending data over TCP and UDP through various socket APIs.
"""
import asyncio
import socket
from typing import List

from protected_access.config import settings
from protected_access.services.base import ProtectedResourceAccess
from protected_access.services.loopback import LoopbackTcpAcceptServer, LoopbackUdpSinkServer

PAYLOAD = b"network-payload"


class NetworkSystemSendAccess(ProtectedResourceAccess):
    """Sends a payload to a loopback server with one of six socket APIs."""

    AMOUNT_OF_METHODS = 6

    SUCCESS_TEMPLATE = "Successfully sent data via {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to send data via {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        return [settings.loopback_host, "0"]

    def operations(self):
        return (
            self.send_with_sendall,
            self.send_with_makefile,
            self.send_with_send,
            self.send_with_asyncio,
            self.send_with_sendto,
            self.send_with_connected_udp,
        )

    @staticmethod
    def _tcp_client(host: str, port: int) -> socket.socket:
        return socket.create_connection((host, port), timeout=settings.loopback_timeout_seconds)

    def send_with_sendall(self, resource: str) -> str:
        with LoopbackTcpAcceptServer("send-tcp-server") as server:
            with self._tcp_client(server.host, server.port) as sock:
                sock.sendall(PAYLOAD)
            self.await_event(server.done, "TCP server")
            return self.success(resource, self.describe_port("socket.sendall", server.port))

    def send_with_makefile(self, resource: str) -> str:
        with LoopbackTcpAcceptServer("send-tcp-server") as server:
            with self._tcp_client(server.host, server.port) as sock:
                with sock.makefile("w", encoding="utf-8") as writer:
                    writer.write("makefile payload")
                    writer.flush()
            self.await_event(server.done, "TCP server")
            return self.success(resource, self.describe_port("socket.makefile", server.port))

    def send_with_send(self, resource: str) -> str:
        with LoopbackTcpAcceptServer("send-tcp-server") as server:
            with self._tcp_client(server.host, server.port) as sock:
                view = memoryview(PAYLOAD)
                while view:
                    sent = sock.send(view)
                    view = view[sent:]
            self.await_event(server.done, "TCP server")
            return self.success(resource, self.describe_port("socket.send", server.port))

    def send_with_asyncio(self, resource: str) -> str:
        async def send(host, port):
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), settings.loopback_timeout_seconds
            )
            writer.write(PAYLOAD)
            await writer.drain()
            writer.close()
            await writer.wait_closed()

        with LoopbackTcpAcceptServer("send-tcp-server") as server:
            asyncio.run(send(server.host, server.port))
            self.await_event(server.done, "TCP server")
            return self.success(resource, self.describe_port("asyncio.StreamWriter.write", server.port))

    def send_with_sendto(self, resource: str) -> str:
        with LoopbackUdpSinkServer(len(PAYLOAD)) as server:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.sendto(PAYLOAD, (server.host, server.port))
            self.await_event(server.done, "UDP server")
            return self.success(resource, self.describe_port("socket.sendto", server.port))

    def send_with_connected_udp(self, resource: str) -> str:
        with LoopbackUdpSinkServer(len(PAYLOAD)) as server:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.connect((server.host, server.port))
                sock.send(PAYLOAD)
            self.await_event(server.done, "UDP server")
            return self.success(resource, self.describe_port("connected UDP socket.send", server.port))
