"""Test configuration for pytest."""

import shutil
import tempfile
from pathlib import Path

import pytest

from toolup.config import ToolupConfig
from toolup.context import CoreContext
from toolup.http_client import HTTPClient, HTTPRequestExecutor
from toolup.io import CapturingOutputHandler, ScriptedInputProvider
from toolup.terminal import DefaultWidthProbe


class FakeExecutor(HTTPRequestExecutor):
    """Request executor that serves canned responses and records requests."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.requests = []
        self.closed = False

    async def get(self, url, headers=None):
        self.requests.append((url, headers))
        return self.responses[url]

    async def close(self):
        self.closed = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_config(temp_dir):
    """Create a sample configuration for testing."""
    return ToolupConfig(
        home_dir=temp_dir / "home",
        shell="/bin/zsh",
        http_timeout=5,
        show_debug=False,
    )


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def capture():
    return CapturingOutputHandler()


@pytest.fixture
def make_context(capture, fake_executor, temp_dir):
    """Build a context with captured output, scripted input and an 80-column terminal."""

    def _make(answers=None, width=80, **overrides):
        values = {
            "current_directory": temp_dir,
            "http_client": HTTPClient(fake_executor),
            "output_handler": capture,
            "input_provider": ScriptedInputProvider(answers or []),
            "width_probe": DefaultWidthProbe(width),
        }
        values.update(overrides)
        return CoreContext(**values)

    return _make


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, temp_dir):
    """Isolate tests from the user's home directory and TOOLUP_* variables."""
    import os

    for key in list(os.environ):
        if key.startswith("TOOLUP_"):
            monkeypatch.delenv(key)

    home = temp_dir / "user-home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))

    yield
