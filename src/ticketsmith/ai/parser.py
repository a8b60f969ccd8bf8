"""Parsing of model output into ticket drafts."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from ticketsmith.ai.exceptions import MalformedResponseError
from ticketsmith.ai.models import TicketCountPolicy, TicketDraft
from ticketsmith.logging import truncate_output

logger = logging.getLogger("ticketsmith.ai.parser")

_OPENING_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```$")


def _as_text(value: Any) -> str | None:
    """Strings as-is, numbers stringified; anything else is unusable."""
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


def strip_code_fence(raw: str) -> str:
    """Remove a surrounding ```json ... ``` markdown fence, if any."""
    text = raw.strip()
    text = _OPENING_FENCE.sub("", text)
    text = _CLOSING_FENCE.sub("", text)
    return text.strip()


class ResponseParser:
    """Turns raw model output into validated ticket drafts.

    Items missing a title or description are dropped with a warning; only a
    response with no usable item at all is rejected.
    """

    def __init__(self, count_policy: TicketCountPolicy | None = None) -> None:
        self.count_policy = count_policy if count_policy is not None else TicketCountPolicy()

    def parse(self, raw: str) -> list[TicketDraft]:
        """Parse a model response.

        Args:
            raw: Message content returned by the provider.

        Returns:
            Drafts in response order, trimmed.

        Raises:
            MalformedResponseError: If the text is not JSON, has no tickets
                array, or no ticket survives validation.
        """
        text = strip_code_fence(raw)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(
                "Failed to parse model response as JSON: %s (response=%s)",
                e.msg,
                truncate_output(text),
            )
            raise MalformedResponseError(f"invalid JSON: {e.msg}") from e

        tickets = data.get("tickets") if isinstance(data, dict) else None
        if not isinstance(tickets, list):
            logger.error("Model response missing tickets array: %s", truncate_output(text))
            raise MalformedResponseError("missing tickets array")

        if not self.count_policy.accepts(len(tickets)):
            logger.warning(
                "Model returned %d ticket(s), expected %d-%d",
                len(tickets),
                self.count_policy.minimum,
                self.count_policy.maximum,
            )

        drafts = []
        for index, item in enumerate(tickets):
            draft = self._to_draft(index, item)
            if draft is not None:
                drafts.append(draft)

        if not drafts:
            logger.error("No valid tickets in model response (received %d)", len(tickets))
            raise MalformedResponseError("no valid tickets after filtering")

        logger.info("Parsed %d ticket draft(s)", len(drafts))
        return drafts

    def _to_draft(self, index: int, item: Any) -> TicketDraft | None:
        if not isinstance(item, dict) or "title" not in item or "description" not in item:
            logger.warning("Ticket #%d missing required fields, skipping", index)
            return None

        title = _as_text(item["title"])
        description = _as_text(item["description"])
        if title is None or description is None:
            logger.warning("Ticket #%d has non-text title or description, skipping", index)
            return None

        title = title.strip()
        description = description.strip()
        if not title or not description:
            logger.warning("Ticket #%d has empty title or description, skipping", index)
            return None

        criteria = item.get("acceptance_criteria")
        if not isinstance(criteria, list):
            if criteria is not None:
                logger.warning("Ticket #%d acceptance_criteria is not a list, ignoring", index)
            criteria = []

        return TicketDraft(
            title=title,
            description=description,
            acceptance_criteria=tuple(
                text for text in (str(c).strip() for c in criteria if c is not None) if text
            ),
        )


def parse_response(raw: str) -> list[TicketDraft]:
    """Parse a model response with the default ticket-count policy."""
    return ResponseParser().parse(raw)
