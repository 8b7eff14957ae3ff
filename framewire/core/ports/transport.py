from typing import Protocol


class StreamConnection(Protocol):
    """
    Byte-stream transport with no inherent message boundaries (TCP).

    Implementations must raise TransportError when the peer closes the
    stream or the read/write primitive fails.
    """

    async def readexactly(self, n: int) -> bytes:
        """Return exactly ``n`` bytes, suspending until they are available."""

    async def write(self, data: bytes) -> None:
        """Write the whole buffer, suspending until the transport accepts it."""

    async def close(self) -> None:
        """Close the connection. Must be safe to call more than once."""


class FrameConnection(Protocol):
    """
    Message-oriented transport whose primitives operate on whole,
    pre-delimited frames (e.g. a WebSocket connection).

    Implementations must raise TransportError when the connection is closed
    or the read/write primitive fails.
    """

    async def read_frame(self) -> bytes:
        """Return the bytes of the next complete frame."""

    async def write_frame(self, data: bytes) -> None:
        """Send ``data`` as one complete frame."""

    async def close(self) -> None:
        """Close the connection. Must be safe to call more than once."""
