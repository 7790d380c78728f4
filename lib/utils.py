# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"[\r\n\t]+")


# =============================================================================
# Text Utilities
# =============================================================================

def excerpt(text: str | None, limit: int) -> str | None:
    """
    First `limit` characters of text, or None when text is empty.

    Example:
        excerpt("Will I get the job?", 6)  # "Will I"
    """
    if not text:
        return None
    return text[:limit]


def flatten_whitespace(text: str) -> str:
    """Replace line breaks and tabs with single spaces."""
    return _WHITESPACE_RUN.sub(" ", text)


# =============================================================================
# Optional Side Effects
# =============================================================================

@dataclass
class StepResult:
    """
    Outcome of one optional side effect.

    Attributes:
        name: Step name used in logs
        ok: True when the step returned without raising
        value: Whatever the step returned (None on failure)
        error: String form of the exception, if any
    """

    name: str
    ok: bool
    value: Any = None
    error: str | None = None


def run_optional_step(name: str, step: Callable[[], Any]) -> StepResult:
    """
    Run a side effect whose failure must not affect the caller.

    Any exception is logged and captured in the result; nothing escapes.

    Example:
        email = run_optional_step("email", lambda: relay.send_email(payload))
        if email.ok and email.value:
            ...
    """
    try:
        value = step()
        return StepResult(name=name, ok=True, value=value)
    except Exception as e:
        logger.warning(f"Optional step '{name}' failed: {e}")
        return StepResult(name=name, ok=False, error=str(e))
