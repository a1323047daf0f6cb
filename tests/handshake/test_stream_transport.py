import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from meta_version.errors import HandshakeMessageError
from meta_version.handshake import StreamTransport


def create_writer(peername=("10.0.0.7", 9191)) -> MagicMock:
    writer = MagicMock()
    writer.drain = AsyncMock()
    writer.wait_closed = AsyncMock()
    writer.is_closing.return_value = False
    writer.get_extra_info.return_value = peername
    return writer


def frame(data: bytes) -> bytes:
    return len(data).to_bytes(4, "big") + data


class TestStreamTransport:

    @pytest.mark.asyncio
    async def test_send_prefixes_length(self):
        writer = create_writer()
        transport = StreamTransport(asyncio.StreamReader(), writer)

        await transport.send(b'{"protocol_version":[1,2,3]}')

        writer.write.assert_called_once_with(frame(b'{"protocol_version":[1,2,3]}'))
        writer.drain.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_receive_reads_whole_frame(self):
        reader = asyncio.StreamReader()
        reader.feed_data(frame(b"first") + frame(b"second"))

        transport = StreamTransport(reader, create_writer())

        assert await transport.receive() == b"first"
        assert await transport.receive() == b"second"

    @pytest.mark.asyncio
    async def test_receive_after_eof(self):
        reader = asyncio.StreamReader()
        reader.feed_data(frame(b"partial")[:6])
        reader.feed_eof()

        transport = StreamTransport(reader, create_writer())

        with pytest.raises(HandshakeMessageError, match="Connection closed"):
            await transport.receive()

    @pytest.mark.asyncio
    async def test_oversized_frames_refused(self):
        reader = asyncio.StreamReader()
        reader.feed_data((1024).to_bytes(4, "big"))

        writer = create_writer()
        transport = StreamTransport(reader, writer, max_frame_size=16)

        with pytest.raises(HandshakeMessageError, match="exceeds 16"):
            await transport.receive()

        with pytest.raises(HandshakeMessageError, match="exceeds 16"):
            await transport.send(b"x" * 17)

        writer.write.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_once(self):
        writer = create_writer()
        transport = StreamTransport(asyncio.StreamReader(), writer)

        await transport.close()
        writer.is_closing.return_value = True
        await transport.close()

        writer.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_after_reset(self):
        writer = create_writer()
        writer.wait_closed.side_effect = ConnectionResetError()

        await StreamTransport(asyncio.StreamReader(), writer).close()

        writer.close.assert_called_once()

    def test_peer(self):
        assert StreamTransport(MagicMock(), create_writer()).peer == "10.0.0.7:9191"
        assert StreamTransport(MagicMock(), create_writer(None)).peer == "unknown"
