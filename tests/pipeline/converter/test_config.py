"""Configuration-related tests for the converter."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from slashport.exceptions import ConfigurationError
from slashport.pipeline.converter import ConverterConfig


def test_defaults(tmp_path: Path):
    cfg = ConverterConfig.from_env(env_dir=tmp_path)
    assert cfg.api_key == ""
    assert cfg.model == "gpt-5"
    assert cfg.base_url == "https://api.openai.com/v1"
    assert cfg.temperature == 0.3
    assert cfg.max_tokens == 2000
    assert cfg.max_content_size == 20000
    assert cfg.delay_ms == 1000
    assert cfg.extension == ".js"
    assert cfg.source_dir == Path("commands/PrefixCommands")
    assert cfg.output_dir == Path("commands/SlashCommands")


def test_env_vars_are_read(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:8080/v1/")
    monkeypatch.setenv("SLASHPORT_MODEL", "local-model")
    monkeypatch.setenv("SLASHPORT_TEMPERATURE", "0.0")
    monkeypatch.setenv("SLASHPORT_DELAY_MS", "250")
    monkeypatch.setenv("SLASHPORT_SOURCE_DIR", "prefix")
    cfg = ConverterConfig.from_env(env_dir=tmp_path)
    assert cfg.api_key == "env-key"
    assert cfg.model == "local-model"
    assert cfg.temperature == 0.0
    assert cfg.delay_ms == 250
    assert cfg.source_dir == Path("prefix")
    assert cfg.completions_url == "http://localhost:8080/v1/chat/completions"


def test_overrides_win_and_none_is_ignored(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    monkeypatch.setenv("SLASHPORT_MODEL", "env-model")
    cfg = ConverterConfig.from_env(
        env_dir=tmp_path, api_key="flag-key", model=None, output_dir="out"
    )
    assert cfg.api_key == "flag-key"
    assert cfg.model == "env-model"
    assert cfg.output_dir == Path("out")


def test_loads_dotenv_file(monkeypatch, tmp_path: Path):
    # Registered with monkeypatch so values written by dotenv are undone.
    monkeypatch.setenv("OPENAI_API_KEY", "placeholder")
    monkeypatch.setenv("SLASHPORT_MAX_CONTENT_SIZE", "1")
    (tmp_path / ".env").write_text(
        "OPENAI_API_KEY=from-dotenv\nSLASHPORT_MAX_CONTENT_SIZE=500\n",
        encoding="utf-8",
    )
    cfg = ConverterConfig.from_env(env_dir=tmp_path)
    assert cfg.api_key == "from-dotenv"
    assert cfg.max_content_size == 500


def test_invalid_number_raises(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("SLASHPORT_DELAY_MS", "soon")
    with pytest.raises(ConfigurationError) as exc:
        ConverterConfig.from_env(env_dir=tmp_path)
    assert "SLASHPORT_DELAY_MS" in exc.value.message


@pytest.mark.parametrize(
    "field, value",
    [("delay_ms", -1), ("max_content_size", 0), ("max_tokens", 0), ("request_timeout", 0)],
)
def test_out_of_range_values_raise(field, value):
    with pytest.raises(ConfigurationError):
        ConverterConfig(**{field: value})


def test_zero_delay_is_allowed():
    assert ConverterConfig(delay_ms=0).delay_ms == 0


def test_unknown_override_raises(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        ConverterConfig.from_env(env_dir=tmp_path, colour="red")


def test_config_is_immutable():
    cfg = ConverterConfig(api_key="k")
    with pytest.raises(FrozenInstanceError):
        cfg.api_key = "other"
