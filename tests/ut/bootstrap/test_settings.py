import pytest
import yaml
from pydantic import ValidationError

from tests.helpers import FakeFramewireConfig

from framewire.bootstrap.deps import format_validation_error
from framewire.core.models.config import ByteOrder


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    file = tmp_path / "framewire.yaml"
    monkeypatch.setenv("TEST_FRAMEWIRECONFIG", str(file))
    return file


@pytest.mark.ut
def test_defaults_without_file(monkeypatch):
    monkeypatch.delenv("TEST_FRAMEWIRECONFIG", raising=False)

    config = FakeFramewireConfig()
    codec = config.get_codec_config()

    assert codec.prefix_width == 2
    assert codec.min_length == 1
    assert codec.max_length == 1024
    assert codec.byte_order is ByteOrder.BIG
    assert config.server.port == 7000


@pytest.mark.ut
def test_yaml_file(config_file):
    data = {
        "codec": {
            "prefix_width": 1,
            "min_length": 2,
            "max_length": 5000,
            "byte_order": "little",
        },
        "server": {"host": "0.0.0.0", "port": 0},
    }
    config_file.write_text(yaml.dump(data))

    config = FakeFramewireConfig()
    codec = config.get_codec_config()

    assert codec.prefix_width == 1
    assert codec.min_length == 2
    assert codec.max_length == 255
    assert codec.byte_order is ByteOrder.LITTLE
    assert config.server.host == "0.0.0.0"


@pytest.mark.ut
def test_invalid_width_is_normalized_not_rejected(config_file):
    config_file.write_text(yaml.dump({"codec": {"prefix_width": 3}}))

    assert FakeFramewireConfig().get_codec_config().prefix_width == 2


@pytest.mark.ut
def test_env_overrides_file(config_file, monkeypatch):
    config_file.write_text(yaml.dump({"codec": {"max_length": 100}}))
    monkeypatch.setenv("FRAMEWIRE_CODEC__MAX_LENGTH", "200")

    assert FakeFramewireConfig().codec.max_length == 200


@pytest.mark.ut
def test_validation_error_message(config_file):
    config_file.write_text(yaml.dump({"codec": {"byte_order": "middle"}}))

    with pytest.raises(ValidationError) as info:
        FakeFramewireConfig()

    message = format_validation_error(info.value)
    assert message.startswith("Configuration validation failed:")
    assert "codec.byte_order" in message
