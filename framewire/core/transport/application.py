from typing import Protocol

from framewire.core.models.message import ReceiveMessage, SendMessage


class Application(Protocol):
    """
    Per-connection handler executed by the MessageServer.

    An Application is an asynchronous callable that receives two functions:
    `receive`, which waits for and returns the next incoming Message (or
    None once the connection is gone), and `send`, which frames and
    transmits a Message to the remote peer.

    The Application runs until it returns or raises an exception. When it
    exits, the underlying connection is closed.

    The Application does not handle framing or transport-level concerns;
    `send` may raise a LengthError when a message does not fit the codec
    bounds, in which case nothing was written and the connection is intact.
    """
    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        ...
