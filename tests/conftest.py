import pytest

from bftape.config import ENV_VARS
from bftape.io_adapter import BufferSink, BufferSource


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def sink():
    return BufferSink()


@pytest.fixture
def source():
    return BufferSource(b"")
