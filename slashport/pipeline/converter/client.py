"""converter.client module.

This module defines the `CompletionClient` class, the asynchronous networking
boundary for all outbound requests to the chat-completion service. Its strict
focus is sending a list of chat messages to an OpenAI-compatible endpoint and
returning the text of the first choice.

The client never performs file I/O or business logic. Every failure (network
errors, timeouts, rate limiting, authentication problems, other HTTP errors
and malformed replies) is raised as a member of the project's exception
taxonomy (:mod:`slashport.exceptions`) so the conversion driver can record a
precise cause and move on. There are no retries: one request is made per
call.

Examples
--------
>>> import aiohttp
>>> from slashport.pipeline.converter.client import CompletionClient
>>> from slashport.pipeline.converter.config import ConverterConfig
>>> client = CompletionClient(ConverterConfig(api_key="secret"))
>>> async def main():
...     async with aiohttp.ClientSession() as session:
...         return await client.complete(
...             session, [{"role": "user", "content": "Hi"}]
...         )
>>> # To actually run:
>>> # import asyncio; asyncio.run(main())
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from slashport.exceptions import (
    APIRateLimitError,
    ConfigurationError,
    ExternalServiceError,
    TimeoutExceededError,
)

logger = logging.getLogger(__name__)

_ERROR_BODY_EXCERPT = 200


class CompletionClient:
    r"""Asynchronous client for an OpenAI-compatible chat-completion API.

    Constructed once per run. The HTTP session is injected per call so the
    caller controls its lifetime and tests can substitute a fake.

    Attributes
    ----------
    config : Any
        Configuration object (normally
        :class:`~slashport.pipeline.converter.config.ConverterConfig`)
        providing ``api_key``, ``completions_url``, ``model``,
        ``temperature``, ``max_tokens`` and ``request_timeout``.

    Raises
    ------
    ConfigurationError
        If no API key is configured.
    """

    def __init__(self, config: Any) -> None:
        if not getattr(config, "api_key", ""):
            raise ConfigurationError(
                "API key not found. Set OPENAI_API_KEY or pass --api-key."
            )
        self.config = config

    def build_payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Return the JSON request body for ``messages``."""
        return {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    async def complete(
        self, session: aiohttp.ClientSession, messages: list[dict[str, str]]
    ) -> str:
        r"""Send ``messages`` and return the content of the first choice.

        Parameters
        ----------
        session : aiohttp.ClientSession
            Open HTTP session. Used and not closed by this method.
        messages : list[dict[str, str]]
            Ordered ``{"role", "content"}`` pairs.

        Returns
        -------
        str
            Reply text; may be empty if the model returned no content.

        Raises
        ------
        TimeoutExceededError
            If the request exceeds ``request_timeout``.
        APIRateLimitError
            On HTTP 429.
        ExternalServiceError
            On network errors, authentication failures, other non-2xx
            statuses or a reply without choices or with non-text content.
        """
        url = self.config.completions_url
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }
        try:
            async with session.post(
                url,
                json=self.build_payload(messages),
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.config.request_timeout),
            ) as response:
                status = response.status
                text = await response.text()
        except TimeoutError as err:
            raise TimeoutExceededError(
                f"Request timed out after {self.config.request_timeout}s",
                context={"url": url},
            ) from err
        except aiohttp.ClientError as err:
            raise ExternalServiceError(
                f"Network error: {err}", context={"url": url}
            ) from err

        return self._parse_reply(status, text)

    @staticmethod
    def _parse_reply(status: int, text: str) -> str:
        context = {"status_code": status}
        if status == 429:
            raise APIRateLimitError("Rate limit exceeded (HTTP 429)", context=context)
        if status in (401, 403):
            raise ExternalServiceError(
                f"Authentication failed (HTTP {status})",
                context=context,
                transient=False,
            )
        if not 200 <= status < 300:
            raise ExternalServiceError(
                f"HTTP {status}: {text[:_ERROR_BODY_EXCERPT]}", context=context
            )

        try:
            data = json.loads(text)
        except json.JSONDecodeError as err:
            raise ExternalServiceError(
                "Invalid JSON in completion reply", context=context
            ) from err

        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            raise ExternalServiceError("No choices in completion reply", context=context)
        first = choices[0] if isinstance(choices[0], dict) else {}
        content = (first.get("message") or {}).get("content") or ""
        if not isinstance(content, str):
            raise ExternalServiceError(
                "Unexpected content type in completion reply",
                context={**context, "content_type": type(content).__name__},
            )
        usage = data.get("usage")
        if usage:
            logger.debug(f"Token usage: {usage}")
        return content
