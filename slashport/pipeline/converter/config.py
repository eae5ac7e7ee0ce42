"""Configuration and environment loader for the command converter.

This module provides ConverterConfig, an immutable value holding everything
a conversion run needs: completion service endpoint and credentials, model
parameters, the content budget, the inter-request delay and the source and
output directories.

Role in Architecture
--------------------
- Forms the boundary between the process environment (``.env`` file,
  environment variables, CLI flags) and the pipeline's typed runtime config.
- Built exactly once at startup and passed to every component that needs it.
- No business or client logic: only loading, structuring and validation.

Examples
--------
>>> from slashport.pipeline.converter.config import ConverterConfig
>>> cfg = ConverterConfig.from_env(api_key="demo", delay_ms=0)
>>> cfg.delay_ms
0
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from dotenv import load_dotenv

from slashport.config import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_DELAY_MS,
    DEFAULT_EXTENSION,
    DEFAULT_MAX_CONTENT_SIZE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SOURCE_DIR,
    DEFAULT_TEMPERATURE,
    ENV_FILENAME,
)
from slashport.exceptions import ConfigurationError


@dataclass(frozen=True)
class ConverterConfig:
    r"""Immutable configuration for a single conversion run.

    Attributes
    ----------
    api_key : str
        Bearer credential for the completion service. May be empty here;
        the client refuses to start without one.
    base_url : str
        Base URL of the OpenAI-compatible API (``/chat/completions`` is
        appended by the client).
    model : str
        Model name sent with every request.
    temperature : float
        Sampling temperature.
    max_tokens : int
        Maximum number of output tokens per reply.
    max_content_size : int
        Character budget for file content sent to the service.
    delay_ms : int
        Pause between consecutive files, in milliseconds.
    source_dir : Path
        Root directory scanned for input files.
    output_dir : Path
        Root directory mirrored for converted files.
    extension : str
        File name suffix selecting input files.
    request_timeout : int
        Total timeout (seconds) for one request.
    """

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    max_content_size: int = DEFAULT_MAX_CONTENT_SIZE
    delay_ms: int = DEFAULT_DELAY_MS
    source_dir: Path = DEFAULT_SOURCE_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    extension: str = DEFAULT_EXTENSION
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        if self.delay_ms < 0:
            raise ConfigurationError(
                "Delay must not be negative", context={"delay_ms": self.delay_ms}
            )
        for name in ("max_content_size", "max_tokens", "request_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(
                    f"{name} must be positive", context={name: getattr(self, name)}
                )
        if not self.base_url:
            raise ConfigurationError("API endpoint must not be empty")

    @property
    def completions_url(self) -> str:
        """Return the full chat-completions URL for ``base_url``."""
        return f"{self.base_url.rstrip('/')}{CHAT_COMPLETIONS_PATH}"

    @classmethod
    def from_env(
        cls, env_dir: Path | None = None, **overrides: Any
    ) -> ConverterConfig:
        r"""Build a config from ``.env``, environment variables and overrides.

        A ``.env`` file in ``env_dir`` (default: the working directory) is
        loaded first with ``override=True`` so its content is authoritative
        over the inherited environment. Explicit keyword overrides, typically
        CLI flags, win over both; an override of ``None`` means "not given".

        Parameters
        ----------
        env_dir : Path | None, optional
            Directory holding the optional ``.env`` file.
        **overrides : Any
            Field values taking precedence over the environment.

        Returns
        -------
        ConverterConfig
            Validated, immutable configuration.

        Raises
        ------
        ConfigurationError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env_path = Path(env_dir or Path.cwd()) / ENV_FILENAME
        if env_path.exists():
            load_dotenv(env_path, override=True)

        values: dict[str, Any] = {
            "api_key": os.getenv("OPENAI_API_KEY", ""),
            "base_url": os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL),
            "model": os.getenv("SLASHPORT_MODEL", DEFAULT_MODEL),
            "temperature": _env_number(
                "SLASHPORT_TEMPERATURE", DEFAULT_TEMPERATURE, float
            ),
            "max_tokens": _env_number("SLASHPORT_MAX_TOKENS", DEFAULT_MAX_TOKENS, int),
            "max_content_size": _env_number(
                "SLASHPORT_MAX_CONTENT_SIZE", DEFAULT_MAX_CONTENT_SIZE, int
            ),
            "delay_ms": _env_number("SLASHPORT_DELAY_MS", DEFAULT_DELAY_MS, int),
            "source_dir": Path(os.getenv("SLASHPORT_SOURCE_DIR", DEFAULT_SOURCE_DIR)),
            "output_dir": Path(os.getenv("SLASHPORT_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
            "extension": os.getenv("SLASHPORT_EXTENSION", DEFAULT_EXTENSION),
            "request_timeout": _env_number(
                "REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, int
            ),
        }
        unknown = set(overrides) - set(values)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )
        values.update({k: v for k, v in overrides.items() if v is not None})
        for key in ("source_dir", "output_dir"):
            values[key] = Path(values[key])
        return cls(**values)


def _env_number(name: str, default: Any, cast: Callable[[str], Any]) -> Any:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as err:
        raise ConfigurationError(
            f"Invalid value for {name}: {raw!r}", context={"variable": name}
        ) from err
