"""Prompt construction for ticket generation."""

from __future__ import annotations

import logging

logger = logging.getLogger("ticketsmith.ai.prompt")

MAX_CONTEXT_CHARS = 8000  # ~2000 tokens at ~4 chars/token
MAX_DESCRIPTION_CHARS = 1000
MAX_USER_PROMPT_CHARS = 500
ELLIPSIS = "..."

INSTRUCTIONS = """\
Please generate 3-5 related tickets that would be good starting points for this project. \
Each ticket should be actionable and well-defined.

Requirements:
1. Generate between 3 and 5 tickets
2. Each ticket must have a clear, concise title
3. Each ticket must have a detailed description explaining what needs to be done
4. Each ticket must include acceptance criteria as an array of specific, testable conditions

Format your response as a JSON object with this exact structure:
{
    "tickets": [
        {
            "title": "Clear, actionable ticket title",
            "description": "Detailed description of what needs to be done and why",
            "acceptance_criteria": [
                "Specific, testable condition 1",
                "Specific, testable condition 2"
            ]
        }
    ]
}

Example of a good ticket:
{
    "title": "Set up project database schema",
    "description": "Create the initial database schema including tables, relationships \
and indexes. This is the foundation for data storage and retrieval.",
    "acceptance_criteria": [
        "All required tables are created with proper column types",
        "Foreign key relationships are established correctly",
        "Indexes exist for frequently queried columns"
    ]
}

Guidelines:
- Titles should be concise (5-10 words) and start with an action verb
- Descriptions should give enough context for someone new to the task
- Acceptance criteria should be specific, measurable and testable
- Focus on foundational tasks that make sense for a new project

Return ONLY the JSON object, no additional text or explanation."""


def truncate_text(text: str, max_length: int) -> str:
    """Shorten text to at most max_length characters at a word boundary.

    The result ends with an ellipsis when shortened. Text without a usable
    space is cut hard at the limit.

    Args:
        text: Text to shorten.
        max_length: Upper bound on the returned length, ellipsis included.

    Returns:
        The original text if short enough, else the shortened text.
    """
    if len(text) <= max_length:
        return text

    window = max(max_length - len(ELLIPSIS), 0)
    # A space right after the window still marks the end of a whole word
    cut = text[: window + 1].rfind(" ")
    kept = text[:cut] if cut > 0 else text[:window]
    return kept.rstrip() + ELLIPSIS


def build_prompt(
    project_name: str,
    project_description: str | None = None,
    user_prompt: str | None = None,
) -> str:
    """Build the ticket-generation prompt for a project.

    Args:
        project_name: Project name, embedded verbatim.
        project_description: Optional description, capped at 1000 characters.
        user_prompt: Optional extra context from the user, capped at 500 characters.

    Returns:
        Prompt text of at most MAX_CONTEXT_CHARS characters.
    """
    context_lines = [f"Project Name: {project_name}"]
    if project_description:
        context_lines.append(
            f"Project Description: {truncate_text(project_description, MAX_DESCRIPTION_CHARS)}"
        )
    if user_prompt:
        context_lines.append(
            f"Additional Context: {truncate_text(user_prompt, MAX_USER_PROMPT_CHARS)}"
        )

    prompt = "\n\n".join(
        [
            "You are a project management assistant helping to generate "
            "initial tickets for a new project.",
            "\n".join(context_lines),
            INSTRUCTIONS,
        ]
    )

    if len(prompt) > MAX_CONTEXT_CHARS:
        logger.warning(
            "Prompt exceeds max context size, truncating (length=%d, max=%d)",
            len(prompt),
            MAX_CONTEXT_CHARS,
        )
        prompt = prompt[:MAX_CONTEXT_CHARS]

    return prompt
