import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from framewire.core.connections.channel import MessageChannel


@dataclass
class ServerState:
    """
    Shared runtime state for a MessageServer.

    This object is mutated by:
    - MessageServer: adds/removes active channels and connection tasks
    - MessageServer.shutdown(): waits for channels and tasks to complete
    """
    connections: set["MessageChannel"] = field(default_factory=set)
    """
    Set of active channels. Each TCP connection corresponds to one channel.
    """

    tasks: set[asyncio.Task[None]] = field(default_factory=set)
    """
    Set of per-connection tasks running the application. Each task removes
    itself via task.add_done_callback(tasks.discard).
    """
