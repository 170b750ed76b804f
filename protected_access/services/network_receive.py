"""
Demonstrations for receiving data over TCP and UDP through various socket APIs.
"""
import asyncio
import socket
from typing import List

from protected_access.config import settings
from protected_access.services.base import ProtectedResourceAccess
from protected_access.services.loopback import LoopbackTcpPayloadServer, LoopbackUdpPayloadServer

TCP_PAYLOAD = b"loopback-response"
UDP_PAYLOAD = b"udp-response"

# Sent to the UDP server so it learns where to answer
REGISTRATION = b"\x00"


class NetworkSystemReceiveAccess(ProtectedResourceAccess):
    """Receives a payload from a loopback server with one of six socket APIs."""

    AMOUNT_OF_METHODS = 6

    SUCCESS_TEMPLATE = "Successfully received data via {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to receive data via {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        return [settings.loopback_host, "0"]

    def operations(self):
        return (
            self.receive_with_recv,
            self.receive_with_makefile,
            self.receive_with_recv_into,
            self.receive_with_asyncio,
            self.receive_with_recvfrom,
            self.receive_with_connected_udp,
        )

    @staticmethod
    def _tcp_client(host: str, port: int) -> socket.socket:
        return socket.create_connection((host, port), timeout=settings.loopback_timeout_seconds)

    def _udp_client(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.settimeout(settings.loopback_timeout_seconds)
        return sock

    def receive_with_recv(self, resource: str) -> str:
        with LoopbackTcpPayloadServer(TCP_PAYLOAD) as server:
            chunks = []
            with self._tcp_client(server.host, server.port) as sock:
                while True:
                    chunk = sock.recv(4096)
                    if not chunk:
                        break
                    chunks.append(chunk)
            self.await_event(server.done, "TCP response")
            result = b"".join(chunks).decode("utf-8")
            return self.success(resource, self.describe_result("socket.recv", result))

    def receive_with_makefile(self, resource: str) -> str:
        with LoopbackTcpPayloadServer(TCP_PAYLOAD) as server:
            with self._tcp_client(server.host, server.port) as sock:
                with sock.makefile("r", encoding="utf-8") as reader:
                    result = reader.readline()
            self.await_event(server.done, "TCP response")
            return self.success(resource, self.describe_result("socket.makefile", result))

    def receive_with_recv_into(self, resource: str) -> str:
        with LoopbackTcpPayloadServer(TCP_PAYLOAD) as server:
            buffer = bytearray(len(TCP_PAYLOAD))
            view = memoryview(buffer)
            received = 0
            with self._tcp_client(server.host, server.port) as sock:
                while received < len(buffer):
                    count = sock.recv_into(view[received:])
                    if not count:
                        break
                    received += count
            self.await_event(server.done, "TCP response")
            result = bytes(buffer[:received]).decode("utf-8")
            return self.success(resource, self.describe_result("socket.recv_into", result))

    def receive_with_asyncio(self, resource: str) -> str:
        async def receive(host, port):
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), settings.loopback_timeout_seconds
            )
            try:
                return await asyncio.wait_for(reader.read(), settings.loopback_timeout_seconds)
            finally:
                writer.close()
                await writer.wait_closed()

        with LoopbackTcpPayloadServer(TCP_PAYLOAD) as server:
            result = asyncio.run(receive(server.host, server.port)).decode("utf-8")
            self.await_event(server.done, "TCP response")
            return self.success(resource, self.describe_result("asyncio.StreamReader.read", result))

    def receive_with_recvfrom(self, resource: str) -> str:
        with LoopbackUdpPayloadServer(UDP_PAYLOAD) as server:
            with self._udp_client() as sock:
                sock.sendto(REGISTRATION, (server.host, server.port))
                data, _ = sock.recvfrom(len(UDP_PAYLOAD))
            self.await_event(server.done, "UDP response")
            return self.success(resource, self.describe_result("socket.recvfrom", data.decode("utf-8")))

    def receive_with_connected_udp(self, resource: str) -> str:
        with LoopbackUdpPayloadServer(UDP_PAYLOAD) as server:
            with self._udp_client() as sock:
                sock.connect((server.host, server.port))
                sock.send(REGISTRATION)
                data = sock.recv(len(UDP_PAYLOAD))
            self.await_event(server.done, "UDP response")
            return self.success(resource, self.describe_result("connected UDP socket.recv", data.decode("utf-8")))
