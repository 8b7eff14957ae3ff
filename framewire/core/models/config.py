import enum
import logging
import ssl
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from framewire.core.transport.application import Application

_logger = logging.getLogger("core.models.config")

PREFIX_WIDTHS = (1, 2, 4)
DEFAULT_PREFIX_WIDTH = 2
DEFAULT_MAX_LENGTH = 1024
DEFAULT_MIN_LENGTH = 1


class ByteOrder(str, enum.Enum):
    """Byte order of multi-byte length prefixes."""
    BIG = "big"
    LITTLE = "little"


def prefix_capacity(width: int) -> int:
    """Largest body length representable by a prefix of ``width`` bytes."""
    return (1 << (8 * width)) - 1


@dataclass(frozen=True)
class CodecConfig:
    """
    Immutable parameter set of a FrameCodec.

    Invalid values are normalized instead of rejected:
    - a prefix width other than 1, 2 or 4 resets to 2
    - each bound is clamped independently to the capacity of the prefix
      width (255, 65535 or 4294967295); negative bounds are raised to 0

    ``min_length > max_length`` is left as is after clamping. Such a
    configuration rejects every message; call ``reconciled()`` explicitly
    to obtain a consistent copy.
    """
    prefix_width: int = DEFAULT_PREFIX_WIDTH
    """
    Number of bytes used to encode the body length: 1, 2 or 4.
    """

    max_length: int = DEFAULT_MAX_LENGTH
    """
    Inclusive upper bound on the body length, prefix excluded.
    """

    min_length: int = DEFAULT_MIN_LENGTH
    """
    Inclusive lower bound on the body length, prefix excluded.
    """

    byte_order: ByteOrder = ByteOrder.BIG
    """
    Byte order of 2- and 4-byte prefixes. Network order by default.
    """

    def __post_init__(self) -> None:
        width = self.prefix_width
        if width not in PREFIX_WIDTHS:
            _logger.debug(
                f"Unsupported prefix width {width!r}, "
                f"using {DEFAULT_PREFIX_WIDTH}"
            )
            width = DEFAULT_PREFIX_WIDTH

        capacity = prefix_capacity(width)
        object.__setattr__(self, "prefix_width", width)
        object.__setattr__(self, "max_length", _clamp(self.max_length, capacity))
        object.__setattr__(self, "min_length", _clamp(self.min_length, capacity))
        object.__setattr__(self, "byte_order", ByteOrder(self.byte_order))

    @property
    def capacity(self) -> int:
        return prefix_capacity(self.prefix_width)

    def with_lengths(
        self,
        prefix_width: int,
        max_length: int = 0,
        min_length: int = 0,
    ) -> "CodecConfig":
        """
        Return a reconfigured copy. A zero bound keeps the current value;
        the width is normalized and both bounds are clamped again.
        """
        return replace(
            self,
            prefix_width=prefix_width,
            max_length=max_length or self.max_length,
            min_length=min_length or self.min_length,
        )

    def reconciled(self) -> "CodecConfig":
        """Return a copy whose ``min_length`` does not exceed ``max_length``."""
        if self.min_length <= self.max_length:
            return self
        return replace(self, min_length=self.max_length)


def _clamp(value: int, capacity: int) -> int:
    if value > capacity:
        _logger.debug(f"Length bound {value} exceeds prefix capacity, using {capacity}")
        return capacity
    return max(value, 0)


@dataclass
class ServerConfig:
    """
    Static configuration for a framewire MessageServer.
    """
    app: "Application"
    """
    The per-connection application coroutine with the signature:
        async def app(receive, send)
    """

    host: str
    """
    IP address or hostname on which the server listens.
    """

    port: int
    """
    TCP port to bind. If set to 0, the OS selects an available port.
    """

    codec: CodecConfig
    """
    Framing parameters shared by every connection of the server.
    """

    backlog: int = 128
    """
    Maximum number of pending TCP connections waiting for accept().
    """

    ssl_ctx: ssl.SSLContext | None = None
    """
    Optional TLS context used to secure incoming connections.
    """

    limit_concurrency: int = 1024
    """
    Maximum number of concurrent active connections allowed.
    """

    timeout_graceful_shutdown: float = 5.0
    """
    Maximum time (in seconds) allowed for graceful shutdown. After this
    timeout, remaining connection tasks are cancelled.
    """
