import asyncio
import logging
from typing import Sequence

from framewire.core.codec.framer import FrameCodec
from framewire.core.models.errors import LengthError, TransportError
from framewire.core.models.message import Message
from framewire.core.ports.serializer import Serializer
from framewire.core.ports.transport import FrameConnection, StreamConnection


class MessageChannel:
    """
    Binds one connection to a FrameCodec and enforces the connection
    lifecycle rules of the framing protocol.

    The connection is either a StreamConnection or a FrameConnection; the
    matching pair of codec operations is selected once, at construction.

    - Any TransportError closes the channel.
    - A LengthError while decoding a stream closes the channel: the prefix
      has been consumed and the next message boundary cannot be found.
    - A LengthError while decoding a frame leaves the channel open, since
      the transport still delimits the following frames.
    - A LengthError while encoding never closes the channel; nothing has
      been written.

    Once closed, reads and writes raise TransportError without touching the
    connection again. Writes are serialized so that concurrent senders never
    interleave on the wire; one reader at a time is expected.
    """
    def __init__(
        self,
        conn: StreamConnection | FrameConnection,
        codec: FrameCodec,
        serializer: Serializer,
    ) -> None:
        self._conn = conn
        self._codec = codec
        self._serializer = serializer
        self._write_lock = asyncio.Lock()
        self._closed = False
        self._logger = logging.getLogger("core.connections.channel")

        if hasattr(conn, "readexactly"):
            self._stream = True
            self._decode = codec.decode_stream
            self._encode = codec.encode_stream
        else:
            self._stream = False
            self._decode = codec.decode_frame
            self._encode = codec.encode_frame

    @property
    def closed(self) -> bool:
        return self._closed

    async def read(self) -> bytes:
        """Return the next message body."""
        if self._closed:
            raise TransportError("channel closed")

        try:
            return await self._decode(self._conn)
        except TransportError:
            await self.close()
            raise
        except LengthError as ex:
            if self._stream:
                self._logger.warning(f"Invalid message length on stream, closing: {ex}")
                await self.close()
            raise

    async def write(self, parts: Sequence[bytes]) -> None:
        """Frame ``parts`` as a single message and send it."""
        if self._closed:
            raise TransportError("channel closed")

        async with self._write_lock:
            try:
                await self._encode(self._conn, parts)
            except TransportError:
                await self.close()
                raise

    async def receive(self) -> Message:
        """Return the next message, decoding its payload with the serializer."""
        body = await self.read()
        return Message.from_body(
            body, self._serializer.deserialize, self._codec.config.byte_order
        )

    async def send(self, message: Message) -> None:
        payload = self._serializer.serialize(message.data)
        await self.write(message.to_parts(payload, self._codec.config.byte_order))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._conn.close()
