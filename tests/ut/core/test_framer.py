import pytest

from tests.fake.fake_transport import FakeFrameConnection, FakeStreamConnection

from framewire.core.codec.framer import FrameCodec
from framewire.core.models.config import ByteOrder, CodecConfig
from framewire.core.models.errors import MessageTooLong, MessageTooShort, TransportError

ALL_LAYOUTS = [
    (width, order)
    for width in (1, 2, 4)
    for order in (ByteOrder.BIG, ByteOrder.LITTLE)
]


@pytest.mark.ut
@pytest.mark.asyncio
@pytest.mark.parametrize("width,order", ALL_LAYOUTS)
async def test_stream_round_trip(width, order):
    codec = FrameCodec(CodecConfig(prefix_width=width, byte_order=order))
    stream = FakeStreamConnection()

    await codec.encode_stream(stream, [b"\x00\x07", b"hello"])
    await codec.encode_stream(stream, [b"x" * 200])
    stream.feed(stream.written)

    assert await codec.decode_stream(stream) == b"\x00\x07hello"
    assert await codec.decode_stream(stream) == b"x" * 200
    assert stream.remaining == b""


@pytest.mark.ut
@pytest.mark.asyncio
@pytest.mark.parametrize("width,order", ALL_LAYOUTS)
async def test_frame_round_trip(width, order):
    codec = FrameCodec(CodecConfig(prefix_width=width, byte_order=order))
    conn = FakeFrameConnection()

    await codec.encode_frame(conn, [b"id", b"payload"])
    conn.feed(conn.frames_written[0])

    assert await codec.decode_frame(conn) == b"idpayload"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_encode_stream_single_write(codec, stream):
    await codec.encode_stream(stream, [b"AB", b"CD"])

    assert stream.writes == [b"\x00\x04ABCD"]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_encode_stream_little_endian(stream):
    codec = FrameCodec(CodecConfig(byte_order=ByteOrder.LITTLE))

    await codec.encode_stream(stream, [b"AB", b"CD"])

    assert stream.writes == [b"\x04\x00ABCD"]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_encode_too_long_writes_nothing(small_codec, stream, frame_conn):
    with pytest.raises(MessageTooLong):
        await small_codec.encode_stream(stream, [b"abc", b"de"])
    with pytest.raises(MessageTooLong):
        await small_codec.encode_frame(frame_conn, [b"abcde"])

    assert stream.writes == []
    assert frame_conn.frames_written == []


@pytest.mark.ut
@pytest.mark.asyncio
async def test_encode_too_short_writes_nothing(small_codec, stream, frame_conn):
    with pytest.raises(MessageTooShort):
        await small_codec.encode_stream(stream, [])
    with pytest.raises(MessageTooShort):
        await small_codec.encode_frame(frame_conn, [b""])

    assert stream.writes == []
    assert frame_conn.frames_written == []


@pytest.mark.ut
@pytest.mark.asyncio
async def test_encode_failure_leaves_connection_usable(small_codec, stream):
    with pytest.raises(MessageTooLong):
        await small_codec.encode_stream(stream, [b"too long"])

    await small_codec.encode_stream(stream, [b"ok"])

    assert stream.writes == [b"\x00\x02ok"]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_stream_too_long(small_codec):
    stream = FakeStreamConnection(b"\x00\x05hello")

    with pytest.raises(MessageTooLong):
        await small_codec.decode_stream(stream)

    # only the prefix was consumed
    assert stream.remaining == b"hello"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_stream_too_short(small_codec):
    stream = FakeStreamConnection(b"\x00\x00")

    with pytest.raises(MessageTooShort):
        await small_codec.decode_stream(stream)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_stream_short_prefix_is_transport_error(codec):
    stream = FakeStreamConnection(b"\x00")

    with pytest.raises(TransportError):
        await codec.decode_stream(stream)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_stream_short_body_is_transport_error(codec):
    stream = FakeStreamConnection(b"\x00\x04AB")

    with pytest.raises(TransportError):
        await codec.decode_stream(stream)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_stream_four_byte_prefix():
    codec = FrameCodec(CodecConfig(prefix_width=4, byte_order=ByteOrder.LITTLE))
    stream = FakeStreamConnection(b"\x03\x00\x00\x00abcrest")

    assert await codec.decode_stream(stream) == b"abc"
    assert stream.remaining == b"rest"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_frame_does_not_truncate(codec):
    # declared length 2, frame carries 5 body bytes
    conn = FakeFrameConnection([b"\x00\x02ABCDE"])

    body = await codec.decode_frame(conn)

    assert body == b"ABCDE"
    assert len(body) == 7 - codec.config.prefix_width


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_frame_validates_declared_length(small_codec):
    conn = FakeFrameConnection([b"\x00\x09AB", b"\x00\x00AB"])

    with pytest.raises(MessageTooLong):
        await small_codec.decode_frame(conn)
    with pytest.raises(MessageTooShort):
        await small_codec.decode_frame(conn)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_frame_shorter_than_prefix():
    codec = FrameCodec(CodecConfig(prefix_width=4, min_length=3))
    conn = FakeFrameConnection([b"\x00\x01"])

    with pytest.raises(MessageTooShort) as info:
        await codec.decode_frame(conn)

    assert info.value.length == 2
    assert info.value.limit == 3
    assert "shorter than the 4-byte length prefix" in str(info.value)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_decode_frame_transport_error_propagates(codec):
    with pytest.raises(TransportError):
        await codec.decode_frame(FakeFrameConnection())


@pytest.mark.ut
def test_codec_default_config():
    assert FrameCodec().config == CodecConfig()
