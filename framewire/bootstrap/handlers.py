import logging

from framewire.core.models.errors import LengthError, TransportError
from framewire.core.models.message import ReceiveMessage, SendMessage


class EchoApplication:
    """
    Sends every received message back to its peer unchanged.

    A message that cannot be echoed because of the codec bounds is dropped
    with a warning; the connection stays open. The loop ends when the peer
    goes away, whether it is noticed by `receive` or by `send`.
    """
    def __init__(self) -> None:
        self._logger = logging.getLogger("bootstrap.handlers.echo")

    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        while True:
            msg = await receive()
            if msg is None:
                break

            try:
                await send(msg)
            except LengthError as ex:
                self._logger.warning(f"Dropped message {msg.id}: {ex}")
            except TransportError as ex:
                self._logger.debug(f"Peer gone while echoing message {msg.id}: {ex}")
                break
