"""Pytest configuration for test environment setup.

- Ensures the project root is available on ``sys.path`` for imports.
- Isolates every test from the developer's environment: converter variables
  are removed and the working directory is a fresh temporary directory, so
  no real ``.env`` file is picked up.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

_CONVERTER_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "SLASHPORT_MODEL",
    "SLASHPORT_TEMPERATURE",
    "SLASHPORT_MAX_TOKENS",
    "SLASHPORT_MAX_CONTENT_SIZE",
    "SLASHPORT_DELAY_MS",
    "SLASHPORT_SOURCE_DIR",
    "SLASHPORT_OUTPUT_DIR",
    "SLASHPORT_EXTENSION",
    "REQUEST_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path_factory):
    """Run each test without converter env vars in an empty working dir."""
    for name in _CONVERTER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def fake_sleep(monkeypatch):
    """Patch ``asyncio.sleep`` and return the list of requested delays."""
    import asyncio

    slept = []

    async def _sleep(delay, *args, **kwargs):
        slept.append(delay)

    monkeypatch.setattr(asyncio, "sleep", _sleep)
    return slept
