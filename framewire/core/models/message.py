import struct
from dataclasses import dataclass, asdict
from typing import Any, Callable, Awaitable

from framewire.core.models.config import ByteOrder
from framewire.core.models.errors import MalformedMessage

ID_SIZE = 2
MAX_MESSAGE_ID = 0xFFFF


@dataclass
class Message:
    """
    Application-level view of a framed body.

    On the wire the body is a 2-byte identifier followed by the serialized
    payload. The identifier uses the byte order of the codec. The framing
    layer treats both as opaque parts; the Serializer encodes ``data``.
    """
    id: int
    """
    Message identifier (uint16), used by consumers to dispatch the payload.
    """

    data: Any
    """
    Any value the configured Serializer can encode.
    """

    def __post_init__(self) -> None:
        if not 0 <= self.id <= MAX_MESSAGE_ID:
            raise ValueError(f"Message id {self.id} out of range 0..{MAX_MESSAGE_ID}")

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dictionary representation of the message."""
        return asdict(self)

    def to_parts(self, payload: bytes, order: ByteOrder = ByteOrder.BIG) -> list[bytes]:
        """Return the ordered parts of the body: identifier, then payload."""
        return [struct.pack(_id_format(order), self.id), payload]

    @classmethod
    def from_body(
        cls,
        body: bytes,
        decode: Callable[[bytes], Any] = bytes,
        order: ByteOrder = ByteOrder.BIG,
    ) -> "Message":
        """
        Build a Message from a decoded body. ``decode`` turns the payload
        bytes into ``data``, typically a Serializer's ``deserialize``.
        """
        message_id, payload = split_body(body, order)
        return cls(id=message_id, data=decode(payload))


def split_body(body: bytes, order: ByteOrder = ByteOrder.BIG) -> tuple[int, bytes]:
    """Split a decoded body into its identifier and its serialized payload."""
    if len(body) < ID_SIZE:
        raise MalformedMessage(
            f"body of {len(body)} byte(s) cannot hold a message identifier"
        )
    (message_id,) = struct.unpack(_id_format(order), body[:ID_SIZE])
    return message_id, bytes(body[ID_SIZE:])


def _id_format(order: ByteOrder) -> str:
    return ">H" if ByteOrder(order) is ByteOrder.BIG else "<H"


ReceiveMessage = Callable[[], Awaitable[Message | None]]
"""
Coroutine provided to the application for receiving a message.
It suspends until a message is available and returns None once the
connection is closed.
"""


SendMessage = Callable[[Message], Awaitable[None]]
"""
Coroutine provided to the application for sending a message to the peer.
"""
