"""OpenAI client configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from ticketsmith.ai.exceptions import ConfigInvalidError

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TIMEOUT = 30.0
DEFAULT_BASE_URL = "https://api.openai.com/v1"


@dataclass(frozen=True)
class OpenAIConfig:
    """Settings for the OpenAI chat-completions client.

    Attributes:
        api_key: Secret key; validated by the client, not here.
        model: Chat model identifier.
        max_tokens: Output token budget per call.
        timeout: Total time budget for one generation call, in seconds.
        base_url: API root, overridable for proxies and tests.
    """

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT
    base_url: str = DEFAULT_BASE_URL

    @property
    def chat_completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    @classmethod
    def from_env(cls) -> OpenAIConfig:
        """Build a config from OPENAI_* environment variables.

        Unset or empty variables fall back to the documented defaults.

        Raises:
            ConfigInvalidError: If OPENAI_MAX_TOKENS is not a positive integer.
        """
        raw_max_tokens = os.environ.get("OPENAI_MAX_TOKENS") or str(DEFAULT_MAX_TOKENS)
        try:
            max_tokens = int(raw_max_tokens)
        except ValueError as e:
            raise ConfigInvalidError(setting="OPENAI_MAX_TOKENS") from e
        if max_tokens <= 0:
            raise ConfigInvalidError(setting="OPENAI_MAX_TOKENS")

        return cls(
            api_key=os.environ.get("OPENAI_API_KEY"),
            model=os.environ.get("OPENAI_MODEL") or DEFAULT_MODEL,
            max_tokens=max_tokens,
            base_url=os.environ.get("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        )
