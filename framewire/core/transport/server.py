import asyncio
import logging

from framewire.core.codec.framer import FrameCodec
from framewire.core.connections.channel import MessageChannel
from framewire.core.models.config import ServerConfig
from framewire.core.models.errors import FramingError, LengthError, TransportError
from framewire.core.models.message import Message
from framewire.core.models.state import ServerState
from framewire.core.ports.serializer import Serializer
from framewire.infra.asyncio_stream import AsyncioStreamConnection


class MessageServer:
    """
    Owns the lifecycle of a TCP server that accepts client connections,
    wraps each of them in a MessageChannel, and coordinates graceful
    shutdown.

    For every accepted connection, the server runs the configured
    application with a `receive` function that decodes the next Message
    from the channel and a `send` function that frames a Message onto it.
    Decode failures are the server's concern, not the application's: any
    TransportError or framing error is logged, the channel is closed, and
    `receive` returns None so the application can terminate.

    Encode failures raised by `send` propagate to the application. A
    LengthError there means nothing was written and the connection is
    still usable.

    Connections beyond `limit_concurrency` are closed immediately. On
    shutdown, the listening socket is closed, active channels are closed,
    and the server waits for connection tasks to finish. If the graceful
    shutdown timeout is exceeded, remaining tasks are cancelled.
    """
    def __init__(
        self,
        config: ServerConfig,
        serializer: Serializer,
        codec: FrameCodec | None = None,
    ) -> None:
        self._config = config
        self._serializer = serializer
        self._codec = codec or FrameCodec(config.codec)
        self.state = ServerState()
        self._logger = logging.getLogger("core.transport.server")

        self._server: asyncio.AbstractServer | None = None

    @property
    def port(self) -> int | None:
        if self._server is None or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        config = self._config
        self._server = await asyncio.start_server(
            self._accept,
            host=config.host,
            port=config.port,
            backlog=config.backlog,
            ssl=config.ssl_ctx,
        )
        self._logger.info(f"Listening on {config.host}:{self.port}")

    async def shutdown(self) -> None:
        if self._server:
            self._server.close()

        for channel in self.state.connections.copy():
            await channel.close()

        try:
            await asyncio.wait_for(
                self._wait_task_complete(),
                timeout=self._config.timeout_graceful_shutdown
            )
        except asyncio.TimeoutError:
            self._logger.error(
                f"Cancel {len(self.state.tasks)} running task(s), "
                f"timeout graceful shutdown: {self.state.tasks}"
            )
            for task in self.state.tasks:
                task.cancel("Task cancelled, timeout graceful shutdown exceeded")

    async def _accept(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        conn = AsyncioStreamConnection(reader, writer)
        who = "%s:%d" % conn.peername if conn.peername else ""

        if len(self.state.connections) >= self._config.limit_concurrency:
            self._logger.warning(f"{who} - Too many connections, closing")
            await conn.close()
            return

        channel = MessageChannel(conn, self._codec, self._serializer)
        self.state.connections.add(channel)
        self._logger.debug(f"{who} - Connection made")

        task = asyncio.current_task()
        if task is not None:
            self.state.tasks.add(task)
            task.add_done_callback(self.state.tasks.discard)

        try:
            await self._run_app(channel, who)
        finally:
            self.state.connections.discard(channel)
            await channel.close()
            self._logger.debug(f"{who} - Connection lost")

    async def _run_app(self, channel: MessageChannel, who: str) -> None:
        async def receive() -> Message | None:
            if channel.closed:
                return None
            try:
                return await channel.receive()
            except TransportError as ex:
                self._logger.debug(f"{who} - {ex}")
            except LengthError as ex:
                self._logger.warning(f"{who} - Invalid frame, closing connection: {ex}")
            except (FramingError, ValueError) as ex:
                self._logger.warning(f"{who} - Invalid message, closing connection: {ex}")
            await channel.close()
            return None

        try:
            await self._config.app(receive, channel.send)
        except TransportError as ex:
            self._logger.debug(f"{who} - Connection lost while sending: {ex}")
        except Exception as exc:
            self._logger.error(f"{who} - Exception in Application", exc_info=exc)

    async def _wait_task_complete(self) -> None:
        if self.state.connections:
            self._logger.info("Waiting for client connections to close.")

        while self.state.connections:
            await asyncio.sleep(0.1)

        if self.state.tasks:
            self._logger.info("Waiting for connection tasks to complete.")

        while self.state.tasks:
            await asyncio.sleep(0.1)

        if self._server:
            await self._server.wait_closed()
