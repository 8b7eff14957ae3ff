import asyncio
import logging

from framewire.core.models.errors import TransportError
from framewire.core.ports.transport import StreamConnection


class AsyncioStreamConnection(StreamConnection):
    """
    StreamConnection backed by an asyncio StreamReader/StreamWriter pair,
    as returned by asyncio.open_connection() or handed to the callback of
    asyncio.start_server().

    A premature end of stream and connection-level OS errors are reported
    as TransportError. Cancellation and timeouts are left untouched.
    """
    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self._reader = reader
        self._writer = writer
        self._closed = False
        self._logger = logging.getLogger("infra.asyncio_stream")

    @property
    def peername(self) -> tuple[str, int] | None:
        peer = self._writer.get_extra_info("peername")
        if isinstance(peer, tuple) and len(peer) >= 2:
            return peer[0], peer[1]
        return None

    @property
    def closed(self) -> bool:
        return self._closed

    async def readexactly(self, n: int) -> bytes:
        try:
            return await self._reader.readexactly(n)
        except asyncio.IncompleteReadError as ex:
            raise TransportError(
                f"connection closed after {len(ex.partial)} of {n} byte(s)"
            ) from ex
        except ConnectionError as ex:
            raise TransportError(f"read failed: {ex}") from ex

    async def write(self, data: bytes) -> None:
        if self._closed or self._writer.is_closing():
            raise TransportError("write on closed connection")
        try:
            self._writer.write(data)
            await self._writer.drain()
        except ConnectionError as ex:
            raise TransportError(f"write failed: {ex}") from ex

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except ConnectionError as ex:
            self._logger.debug(f"Error while closing stream: {ex}")
