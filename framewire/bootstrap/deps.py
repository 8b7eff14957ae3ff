import json
from functools import lru_cache

from pydantic import ValidationError

from framewire.bootstrap.config.settings import FramewireConfig
from framewire.bootstrap.handlers import EchoApplication
from framewire.core.controlplane import ControlPlane
from framewire.infra.msgpack_serializer import MsgPackSerializer


@lru_cache
def get_cp() -> ControlPlane:
    return ControlPlane(
        config=get_config(),
        app=get_app(),
        serializer=MsgPackSerializer(),
    )


@lru_cache
def get_app() -> EchoApplication:
    return EchoApplication()


@lru_cache
def get_config() -> FramewireConfig:
    try:
        return FramewireConfig()
    except ValidationError as ex:
        raise SystemExit(format_validation_error(ex))


def format_validation_error(ex: ValidationError) -> str:
    msg = ["Configuration validation failed:"]
    errs = json.loads(ex.json())
    for err in errs:
        msg.append(f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}")
    return "\n".join(msg)
