"""
Length-prefix helpers shared by every transport variant of the FrameCodec.

Wire format:

    [ length prefix: prefix_width bytes, byte_order ] [ body: n bytes ]

where ``n`` is the total byte count of the body (all parts concatenated).
"""
import struct
from typing import Sequence

from framewire.core.models.config import ByteOrder, CodecConfig
from framewire.core.models.errors import MessageTooLong, MessageTooShort

_FORMATS = {1: "B", 2: "H", 4: "I"}
_ORDERS = {ByteOrder.BIG: ">", ByteOrder.LITTLE: "<"}


def _length_struct(width: int, order: ByteOrder) -> struct.Struct:
    return struct.Struct(_ORDERS[ByteOrder(order)] + _FORMATS[width])


def encode_length(n: int, width: int, order: ByteOrder = ByteOrder.BIG) -> bytes:
    """Encode ``n`` on ``width`` bytes. Byte order is irrelevant for width 1."""
    return _length_struct(width, order).pack(n)


def decode_length(data: bytes, width: int, order: ByteOrder = ByteOrder.BIG) -> int:
    """Inverse of ``encode_length``; ``data`` must hold exactly ``width`` bytes."""
    return _length_struct(width, order).unpack(data)[0]


def check_length(n: int, config: CodecConfig) -> None:
    """Raise a LengthError unless ``min_length <= n <= max_length``."""
    if n > config.max_length:
        raise MessageTooLong(n, config.max_length)
    if n < config.min_length:
        raise MessageTooShort(n, config.min_length)


def unpack_prefix(data: bytes, config: CodecConfig) -> int:
    """Decode a length prefix and validate it against the configured bounds."""
    n = decode_length(data, config.prefix_width, config.byte_order)
    check_length(n, config)
    return n


def pack(parts: Sequence[bytes], config: CodecConfig) -> bytes:
    """
    Build one contiguous buffer holding the length prefix followed by every
    part in order. Bounds are checked before anything is allocated.
    """
    n = sum(len(part) for part in parts)
    check_length(n, config)

    width = config.prefix_width
    buffer = bytearray(width + n)
    _length_struct(width, config.byte_order).pack_into(buffer, 0, n)

    offset = width
    for part in parts:
        size = len(part)
        buffer[offset:offset + size] = part
        offset += size

    return bytes(buffer)
