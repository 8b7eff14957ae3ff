import asyncio
import logging

from framewire.bootstrap.config.settings import FramewireConfig
from framewire.core.codec.framer import FrameCodec
from framewire.core.models.config import ServerConfig
from framewire.core.ports.serializer import Serializer
from framewire.core.transport.application import Application
from framewire.core.transport.server import MessageServer


class ControlPlane:
    def __init__(
        self,
        config: FramewireConfig,
        app: Application,
        serializer: Serializer,
    ) -> None:
        self._config = config
        self._app = app
        self._loop = self._create_event_loop()
        self._serializer = serializer
        self._codec = FrameCodec(config.get_codec_config())
        self._server_config = self._build_server_config()
        self._logger = logging.getLogger("framewire.controlplane")

        self._server = MessageServer(
            config=self._server_config,
            serializer=self._serializer,
            codec=self._codec,
        )

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def server(self) -> MessageServer:
        return self._server

    async def start(self, stop_event: asyncio.Event) -> None:
        codec = self._codec.config
        self._logger.info(
            f"Framing: {codec.prefix_width}-byte {codec.byte_order.value}-endian prefix, "
            f"body length in [{codec.min_length}, {codec.max_length}]"
        )
        await self._server.start()
        await stop_event.wait()
        self._logger.info("Shutting down")
        await self._server.shutdown()

    def _build_server_config(self) -> ServerConfig:
        server_config = self._config.server

        return ServerConfig(
            app=self._app,
            host=server_config.host,
            port=server_config.port,
            codec=self._codec.config,
            backlog=server_config.backlog,
            limit_concurrency=server_config.limit_concurrency,
            timeout_graceful_shutdown=server_config.timeout_graceful_shutdown,
        )

    @staticmethod
    def _create_event_loop() -> asyncio.AbstractEventLoop:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop
