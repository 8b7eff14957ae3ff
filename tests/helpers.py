import os
from pathlib import Path

from framewire.bootstrap.config.settings import FramewireConfig


class FakeFramewireConfig(FramewireConfig):
    @classmethod
    def config_file(cls) -> Path | None:
        raw = os.environ.get("TEST_FRAMEWIRECONFIG")
        return Path(raw) if raw else None
