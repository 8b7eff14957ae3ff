import pytest

from tests.fake.fake_transport import FakeFrameConnection, FakeSerializer, FakeStreamConnection

from framewire.core.codec.framer import FrameCodec
from framewire.core.models.config import CodecConfig


@pytest.fixture
def serializer():
    return FakeSerializer()


@pytest.fixture
def stream():
    return FakeStreamConnection()


@pytest.fixture
def frame_conn():
    return FakeFrameConnection()


@pytest.fixture
def codec():
    return FrameCodec(CodecConfig())


@pytest.fixture
def small_codec():
    return FrameCodec(CodecConfig(min_length=1, max_length=4))
