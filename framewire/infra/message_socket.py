import asyncio
import logging
from typing import Any, Protocol

from framewire.core.models.errors import TransportError
from framewire.core.ports.transport import FrameConnection


class MessageSocket(Protocol):
    """
    Minimal surface of a WebSocket-style connection, as exposed by the
    common asyncio WebSocket clients and servers.
    """
    async def recv(self) -> str | bytes:
        ...

    async def send(self, message: bytes) -> None:
        ...

    async def close(self) -> None:
        ...


class MessageSocketConnection(FrameConnection):
    """
    FrameConnection over a WebSocket-style object. Each message received
    from the socket is one frame; text messages are encoded as UTF-8.

    Any exception raised by the socket while reading or writing, other
    than cancellation, is reported as TransportError with the original
    error chained.
    """
    def __init__(self, socket: MessageSocket) -> None:
        self._socket = socket
        self._closed = False
        self._logger = logging.getLogger("infra.message_socket")

    @property
    def closed(self) -> bool:
        return self._closed

    async def read_frame(self) -> bytes:
        try:
            message = await self._socket.recv()
        except Exception as ex:
            raise TransportError(f"read failed: {ex}") from ex

        if isinstance(message, str):
            return message.encode("utf-8")
        return bytes(message)

    async def write_frame(self, data: bytes) -> None:
        if self._closed:
            raise TransportError("write on closed connection")
        try:
            await self._socket.send(data)
        except Exception as ex:
            raise TransportError(f"write failed: {ex}") from ex

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self._socket.close()
        except Exception as ex:  # noqa
            self._logger.debug(f"Error while closing socket: {ex}")


_EOF: Any = object()


class QueueFrameConnection(FrameConnection):
    """
    In-process FrameConnection exchanging frames through two asyncio queues.
    Closing either end delivers end-of-stream to the peer, whose
    subsequent writes raise TransportError; its reads raise once the
    frames queued before the close have been consumed.
    """
    def __init__(self, incoming: asyncio.Queue, outgoing: asyncio.Queue) -> None:
        self._incoming = incoming
        self._outgoing = outgoing
        self._peer: "QueueFrameConnection | None" = None
        self._closed = False
        self._eof = False
        self._peer_closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def read_frame(self) -> bytes:
        if self._eof:
            raise TransportError("connection closed by peer")

        frame = await self._incoming.get()
        if frame is _EOF:
            self._eof = True
            raise TransportError("connection closed by peer")
        return frame

    async def write_frame(self, data: bytes) -> None:
        if self._closed:
            raise TransportError("write on closed connection")
        if self._peer_closed:
            raise TransportError("connection closed by peer")
        await self._outgoing.put(bytes(data))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._peer is not None:
            self._peer._peer_closed = True
        self._outgoing.put_nowait(_EOF)
        self._incoming.put_nowait(_EOF)


def frame_pipe() -> tuple[QueueFrameConnection, QueueFrameConnection]:
    """Return two connected in-process frame connections."""
    left: asyncio.Queue = asyncio.Queue()
    right: asyncio.Queue = asyncio.Queue()
    first, second = QueueFrameConnection(left, right), QueueFrameConnection(right, left)
    first._peer, second._peer = second, first
    return first, second
