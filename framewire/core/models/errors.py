class FramingError(Exception):
    """Base class of every error raised by the framing layer."""


class TransportError(FramingError):
    """
    The underlying read or write primitive failed: the peer closed the
    connection, reset it, or delivered fewer bytes than announced.

    A TransportError is always fatal to the connection.
    """


class LengthError(FramingError):
    """
    A decoded or computed body length lies outside the configured
    ``[min_length, max_length]`` range.

    On the stream decode path the byte boundary is lost once the prefix has
    been consumed, so the connection must be closed. On the encode path
    nothing has been written and the connection remains usable.
    """
    def __init__(self, message: str, length: int, limit: int) -> None:
        super().__init__(message)
        self.length = length
        self.limit = limit


class MessageTooLong(LengthError):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"message too long: {length} bytes (max {limit})", length, limit
        )


class MessageTooShort(LengthError):
    def __init__(self, length: int, limit: int, message: str | None = None) -> None:
        super().__init__(
            message or f"message too short: {length} bytes (min {limit})", length, limit
        )


class MalformedMessage(FramingError):
    """A body cannot be parsed as an identifier followed by a payload."""
