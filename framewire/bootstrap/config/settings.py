from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from framewire.bootstrap.config.loader import get_configfile
from framewire.core.models.config import ByteOrder, CodecConfig


class CodecSettings(BaseModel):
    prefix_width: Annotated[
        int,
        Field(
            description=(
                "Size in bytes of the length prefix: 1, 2 or 4.\n"
                "Any other value falls back to 2."
            ),
            default=2
        )
    ]

    min_length: Annotated[
        int,
        Field(
            description=(
                "Smallest accepted body length, prefix excluded (inclusive).\n"
                "Clamped to the capacity of the prefix width."
            ),
            default=1,
            ge=0
        )
    ]

    max_length: Annotated[
        int,
        Field(
            description=(
                "Largest accepted body length, prefix excluded (inclusive).\n"
                "Clamped to the capacity of the prefix width "
                "(255, 65535 or 4294967295)."
            ),
            default=1024,
            ge=0
        )
    ]

    byte_order: Annotated[
        Literal["big", "little"],
        Field(
            description="Byte order of 2- and 4-byte length prefixes.",
            default="big"
        )
    ]

    def to_codec_config(self) -> CodecConfig:
        return CodecConfig(
            prefix_width=self.prefix_width,
            max_length=self.max_length,
            min_length=self.min_length,
            byte_order=ByteOrder(self.byte_order),
        )


class ServerSettings(BaseModel):
    host: Annotated[
        str,
        Field(
            description="Bind address of the server.",
            default="127.0.0.1"
        )
    ]

    port: Annotated[
        int,
        Field(
            description="TCP port of the server. 0 lets the OS pick one.",
            default=7000
        )
    ]

    backlog: Annotated[
        int,
        Field(
            description="Maximum number of pending TCP connections.",
            default=128
        )
    ]

    timeout_graceful_shutdown: Annotated[
        float,
        Field(
            description="Maximum time allowed for graceful shutdown.",
            default=5.0
        )
    ]

    limit_concurrency: Annotated[
        int,
        Field(
            description="Maximum number of concurrent connections.",
            default=1024
        )
    ]


class FramewireConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FRAMEWIRE_",
        env_nested_delimiter="__",
        extra="allow"
    )

    codec: Annotated[
        CodecSettings,
        Field(
            description=(
                "Framing configuration.\n"
                "Defines the length prefix format and the accepted body sizes.\n"
                "Both ends of a connection must use the same values."
            ),
            default_factory=CodecSettings
        )
    ]

    server: Annotated[
        ServerSettings,
        Field(
            description="Listening socket and runtime limits of the server.",
            default_factory=ServerSettings
        )
    ]

    @classmethod
    def config_file(cls) -> Path | None:
        return get_configfile()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        file = cls.config_file()
        if file is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=file),)
        return sources

    def get_codec_config(self) -> CodecConfig:
        return self.codec.to_codec_config()
