"""AI generation - prompt building, OpenAI client and response parsing."""

from ticketsmith.ai.client import GenerationClient, OpenAIClient, is_valid_api_key
from ticketsmith.ai.config import OpenAIConfig
from ticketsmith.ai.exceptions import (
    ConfigInvalidError,
    ConfigMissingError,
    GenerationError,
    GenerationErrorKind,
    GenerationTimeoutError,
    MalformedResponseError,
    NetworkFailureError,
    RateLimitedError,
    UnauthorizedError,
)
from ticketsmith.ai.models import TicketCountPolicy, TicketDraft
from ticketsmith.ai.parser import ResponseParser, parse_response
from ticketsmith.ai.prompt import build_prompt, truncate_text

__all__ = [
    "ConfigInvalidError",
    "ConfigMissingError",
    "GenerationClient",
    "GenerationError",
    "GenerationErrorKind",
    "GenerationTimeoutError",
    "MalformedResponseError",
    "NetworkFailureError",
    "OpenAIClient",
    "OpenAIConfig",
    "RateLimitedError",
    "ResponseParser",
    "TicketCountPolicy",
    "TicketDraft",
    "UnauthorizedError",
    "build_prompt",
    "is_valid_api_key",
    "parse_response",
    "truncate_text",
]
