"""OpenAI chat-completions client used for ticket generation."""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol

import httpx

from ticketsmith.ai.config import OpenAIConfig
from ticketsmith.ai.exceptions import (
    ConfigInvalidError,
    ConfigMissingError,
    GenerationTimeoutError,
    MalformedResponseError,
    NetworkFailureError,
    RateLimitedError,
    UnauthorizedError,
)
from ticketsmith.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("ticketsmith.ai.client")

API_KEY_PREFIX = "sk-"
MIN_API_KEY_LENGTH = 21
TEMPERATURE = 0.7


class GenerationClient(Protocol):
    """Anything that turns a prompt into raw model output."""

    def generate(self, prompt: str) -> str:
        """Return the raw text content for a prompt.

        Raises:
            GenerationError: On any provider or transport failure.
        """
        ...


def is_valid_api_key(api_key: str) -> bool:
    """Check the key has the provider prefix and a plausible length."""
    return api_key.startswith(API_KEY_PREFIX) and len(api_key) >= MIN_API_KEY_LENGTH


class OpenAIClient:
    """Client for the OpenAI chat-completions endpoint.

    Configuration is validated on construction so a bad key fails before any
    request is made. Every call is a single HTTP attempt; nothing is retried.
    """

    def __init__(
        self,
        config: OpenAIConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize and validate the client.

        Args:
            config: Client settings. Read from the environment when omitted.
            http_client: Pre-built HTTP client (for testing/proxies).

        Raises:
            ConfigMissingError: If no API key is configured.
            ConfigInvalidError: If the API key has the wrong shape.
        """
        self.config = config if config is not None else OpenAIConfig.from_env()

        if not self.config.api_key:
            logger.error("OpenAI API key not configured")
            raise ConfigMissingError("OPENAI_API_KEY")
        if not is_valid_api_key(self.config.api_key):
            logger.error("OpenAI API key has an invalid format")
            raise ConfigInvalidError("OPENAI_API_KEY")

        self._api_key = self.config.api_key
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def model(self) -> str:
        return self.config.model

    @property
    def max_tokens(self) -> int:
        return self.config.max_tokens

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.config.timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client if this object created it.

        An injected client belongs to the caller and is only released.
        """
        if self._client is not None and self._owns_client:
            self._client.close()
        self._client = None
        self._owns_client = True

    def __enter__(self) -> OpenAIClient:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def generate(self, prompt: str) -> str:
        """Send the prompt and return the message content.

        Args:
            prompt: Full prompt text.

        Returns:
            Raw content of the first choice.

        Raises:
            RateLimitedError: Provider answered 429.
            UnauthorizedError: Provider answered 401.
            NetworkFailureError: Connection failure or other non-success status.
            GenerationTimeoutError: No response within the timeout.
            MalformedResponseError: Success status without usable content.
        """
        logger.info(
            "Calling OpenAI API (model=%s, max_tokens=%d, prompt_length=%d)",
            self.model,
            self.max_tokens,
            len(prompt),
        )

        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": TEMPERATURE,
        }

        started = time.monotonic()
        try:
            # Injected clients carry no auth headers of their own
            response = self.client.post(
                self.config.chat_completions_url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.config.timeout,
            )
        except httpx.TimeoutException as e:
            elapsed = time.monotonic() - started
            logger.error("OpenAI request timed out after %.1fs: %s", elapsed, e)
            raise GenerationTimeoutError(self.config.timeout, elapsed) from e
        except httpx.TransportError as e:
            elapsed = time.monotonic() - started
            # Some transports report an expired deadline as a plain connection error
            if elapsed >= self.config.timeout:
                logger.error("OpenAI request exceeded timeout (%.1fs): %s", elapsed, e)
                raise GenerationTimeoutError(self.config.timeout, elapsed) from e
            logger.error("Network error calling OpenAI: %s", sanitize_for_log(str(e)))
            raise NetworkFailureError(reason=type(e).__name__) from e

        # httpx applies the timeout per connect, read and write phase; the budget
        # covers the whole call
        elapsed = time.monotonic() - started
        if elapsed > self.config.timeout:
            logger.error(
                "OpenAI response arrived after the %.1fs budget (elapsed=%.1fs)",
                self.config.timeout,
                elapsed,
            )
            raise GenerationTimeoutError(self.config.timeout, elapsed)

        self._raise_for_status(response)
        content = self._extract_content(response)

        logger.info("OpenAI API call successful (response_length=%d)", len(content))
        return content

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Map an unsuccessful status code to a generation error."""
        if response.status_code == 429:
            logger.warning("OpenAI rate limit exceeded")
            raise RateLimitedError(response.headers.get("retry-after"))

        if response.status_code == 401:
            logger.error("OpenAI rejected the API key")
            raise UnauthorizedError()

        if not response.is_success:
            logger.error(
                "OpenAI request failed (status=%d, body=%s)",
                response.status_code,
                sanitize_for_log(truncate_output(response.text)),
            )
            raise NetworkFailureError(status_code=response.status_code)

    def _extract_content(self, response: httpx.Response) -> str:
        """Read choices[0].message.content from a success response."""
        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                "OpenAI response is not valid JSON: %s",
                sanitize_for_log(truncate_output(response.text)),
            )
            raise MalformedResponseError("response body is not valid JSON") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(
                "Unexpected OpenAI response structure: %s",
                sanitize_for_log(truncate_output(str(data))),
            )
            raise MalformedResponseError("missing choices[0].message.content") from e

        if not isinstance(content, str):
            logger.error("OpenAI message content is not a string: %r", type(content).__name__)
            raise MalformedResponseError("message content is not a string")

        return content
