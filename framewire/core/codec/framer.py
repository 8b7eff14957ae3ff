from typing import Sequence

from framewire.core.codec.length import pack, unpack_prefix
from framewire.core.models.config import CodecConfig
from framewire.core.models.errors import MessageTooShort
from framewire.core.ports.transport import FrameConnection, StreamConnection


class FrameCodec:
    """
    Converts a stream or frame connection into a sequence of bounded-size
    messages and back.

    Every message travels as a length prefix (1, 2 or 4 bytes, in the
    configured byte order) followed by the body. The same prefix format is
    used on both transports; the two operation pairs only differ in how
    bytes are obtained and delivered:

    - stream: exact-N-byte reads and a single whole-buffer write
    - frame: one whole-frame read and one whole-frame write

    FrameCodec holds nothing but its immutable CodecConfig, so one instance
    may be shared by any number of connections. It never logs, retries or
    swallows an error: TransportError and LengthError propagate to the
    caller, together with cancellation and timeouts raised by the transport.

    A LengthError raised by ``decode_stream`` leaves the stream positioned
    inside a message body; the caller must close that connection. A
    LengthError raised by an encode operation means nothing was written.
    """
    def __init__(self, config: CodecConfig | None = None) -> None:
        self.config = config or CodecConfig()

    async def decode_stream(self, conn: StreamConnection) -> bytes:
        config = self.config
        prefix = await conn.readexactly(config.prefix_width)
        n = unpack_prefix(prefix, config)
        return await conn.readexactly(n)

    async def encode_stream(self, conn: StreamConnection, parts: Sequence[bytes]) -> None:
        buffer = pack(parts, self.config)
        await conn.write(buffer)

    async def decode_frame(self, conn: FrameConnection) -> bytes:
        """
        Read one frame and return every byte after its length prefix.

        The nested prefix is validated against the configured bounds but is
        not used to slice the payload: the frame boundary set by the
        transport is authoritative, so trailing bytes beyond the declared
        length are returned as well.
        """
        config = self.config
        frame = await conn.read_frame()
        width = config.prefix_width
        if len(frame) < width:
            raise MessageTooShort(
                len(frame),
                config.min_length,
                f"frame of {len(frame)} byte(s) is shorter than the {width}-byte length prefix",
            )

        unpack_prefix(frame[:width], config)
        return bytes(frame[width:])

    async def encode_frame(self, conn: FrameConnection, parts: Sequence[bytes]) -> None:
        buffer = pack(parts, self.config)
        await conn.write_frame(buffer)
