import asyncio

import pytest

from meta_version.env import Env
from meta_version.errors import HandshakeMessageError
from meta_version.logging import LoggingConfig
from meta_version.protocol import Feature, SpecBuilder, Version


_CLOSED = object()


class MemoryTransport:
    """One end of an in-memory connection carrying whole frames."""

    def __init__(self, peer: str) -> None:
        self._peer = peer
        self._inbox: asyncio.Queue = asyncio.Queue()
        self.remote: MemoryTransport | None = None
        self.sent: list[bytes] = []
        self.closed = False

    @property
    def peer(self) -> str:
        return self._peer

    async def send(self, data: bytes) -> None:
        if self.closed:
            raise ConnectionResetError("Transport is closed")

        self.sent.append(data)

        if self.remote is not None and not self.remote.closed:
            self.remote._inbox.put_nowait(data)

    async def receive(self) -> bytes:
        data = await self._inbox.get()
        if data is _CLOSED:
            raise HandshakeMessageError("Connection closed during handshake")

        return data

    async def close(self) -> None:
        if self.closed:
            return

        self.closed = True

        if self.remote is not None:
            self.remote._inbox.put_nowait(_CLOSED)


class SilentTransport(MemoryTransport):
    """A transport whose peer never answers."""

    async def send(self, data: bytes) -> None:
        self.sent.append(data)


def create_transport_pair() -> tuple[MemoryTransport, MemoryTransport]:
    client = MemoryTransport(peer="server:9191")
    server = MemoryTransport(peer="client:50123")
    client.remote = server
    server.remote = client
    return client, server


def v(major: int, minor: int, patch: int) -> Version:
    return Version(major, minor, patch)


@pytest.fixture
def transport_factory():
    return create_transport_pair


@pytest.fixture
def transport_pair() -> tuple[MemoryTransport, MemoryTransport]:
    return create_transport_pair()


@pytest.fixture
def silent_transport() -> SilentTransport:
    return SilentTransport(peer="unresponsive:9191")


@pytest.fixture
def fast_env() -> Env:
    return Env(META_VERSION_HANDSHAKE_TIMEOUT="0.05s")


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="debug")
    yield
    config.update(log_level="info")


@pytest.fixture
def additions_spec():
    """Only KV_READ_V1, TRANSACTION and WATCH_INITIAL_FLUSH have history."""
    builder = SpecBuilder()
    builder.client_add(Feature.KV_READ_V1, v(1, 2, 176))
    builder.server_add(Feature.KV_READ_V1, v(1, 2, 163))
    builder.client_add(Feature.TRANSACTION, v(1, 2, 259))
    builder.server_add(Feature.TRANSACTION, v(1, 2, 258))
    builder.client_add(Feature.WATCH_INITIAL_FLUSH, v(1, 2, 726))
    builder.server_add(Feature.WATCH_INITIAL_FLUSH, v(1, 2, 677))
    return builder.build(v(1, 2, 800))


@pytest.fixture
def removals_spec():
    """Only KV_API_GET_KV and TRANSACTION_REPLY_ERROR have history."""
    builder = SpecBuilder()
    builder.server_add(Feature.KV_API_GET_KV, v(1, 2, 163))
    builder.server_remove(Feature.KV_API_GET_KV, v(1, 2, 663))
    builder.client_add(Feature.KV_API_GET_KV, v(1, 2, 163))
    builder.client_remove(Feature.KV_API_GET_KV, v(1, 2, 287))
    builder.server_add(Feature.TRANSACTION_REPLY_ERROR, v(1, 2, 258))
    builder.server_remove(Feature.TRANSACTION_REPLY_ERROR, v(1, 2, 755))
    builder.client_add(Feature.TRANSACTION_REPLY_ERROR, v(1, 2, 258))
    builder.client_remove(Feature.TRANSACTION_REPLY_ERROR, v(1, 2, 676))
    return builder.build(v(1, 2, 873))
