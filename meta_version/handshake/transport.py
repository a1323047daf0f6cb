"""
Transports the handshake runs over.

The handshake only needs to send and receive whole frames and to close the
connection. HandshakeTransport describes that surface; StreamTransport
implements it over an asyncio stream pair with a 4-byte big-endian length
prefix per frame.
"""

import asyncio
import struct
from typing import Protocol

from meta_version.errors.handshake import HandshakeMessageError


MAX_FRAME_SIZE = 64 * 1024

_FRAME_HEADER = struct.Struct(">I")


class HandshakeTransport(Protocol):

    @property
    def peer(self) -> str: ...

    async def send(self, data: bytes) -> None: ...

    async def receive(self) -> bytes: ...

    async def close(self) -> None: ...


class StreamTransport:
    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        max_frame_size: int = MAX_FRAME_SIZE,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._max_frame_size = max_frame_size

    @property
    def peer(self) -> str:
        peername = self._writer.get_extra_info("peername")
        if isinstance(peername, tuple) and len(peername) >= 2:
            return f"{peername[0]}:{peername[1]}"

        return str(peername) if peername else "unknown"

    async def send(self, data: bytes) -> None:
        if len(data) > self._max_frame_size:
            raise HandshakeMessageError(
                f"Handshake frame of {len(data)} bytes exceeds {self._max_frame_size}"
            )

        self._writer.write(_FRAME_HEADER.pack(len(data)) + data)
        await self._writer.drain()

    async def receive(self) -> bytes:
        try:
            header = await self._reader.readexactly(_FRAME_HEADER.size)
            (size,) = _FRAME_HEADER.unpack(header)

            if size > self._max_frame_size:
                raise HandshakeMessageError(
                    f"Handshake frame of {size} bytes exceeds {self._max_frame_size}"
                )

            return await self._reader.readexactly(size)

        except asyncio.IncompleteReadError as err:
            raise HandshakeMessageError(
                "Connection closed during handshake"
            ) from err

    async def close(self) -> None:
        if self._writer.is_closing():
            return

        self._writer.close()

        try:
            await self._writer.wait_closed()

        except ConnectionError:
            # Peer already reset the connection, nothing left to release.
            pass
