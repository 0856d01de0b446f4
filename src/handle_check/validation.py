"""
Handle format validation for handle-check.

Checks a candidate X/Twitter handle against the platform's format rules and
proposes corrected handles. Pure Python implementation - no I/O, no state.
"""

import re
from dataclasses import dataclass, field
from typing import Any

MAX_HANDLE_LENGTH = 15
MAX_SUGGESTIONS = 3

# Error messages, in rule-evaluation order
EMPTY_MESSAGE = "Username cannot be empty"
LENGTH_MESSAGE = f"Username must be {MAX_HANDLE_LENGTH} characters or less"
CHARSET_MESSAGE = "Username can only contain letters, numbers, and underscores"
LEADING_DIGIT_MESSAGE = "Username cannot start with a number"
CONSECUTIVE_UNDERSCORE_MESSAGE = "Username cannot contain consecutive underscores"
EDGE_UNDERSCORE_MESSAGE = "Username cannot start or end with an underscore"

DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_]")
UNDERSCORE_RUN = re.compile(r"_+")


@dataclass
class ValidationOutcome:
    """Result of checking a handle against the format rules."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "suggestions": list(self.suggestions),
        }


def normalize_handle(raw: str) -> str:
    """Strip a single leading '@' from a handle."""
    return raw[1:] if raw.startswith("@") else raw


def validate_handle(raw: str) -> ValidationOutcome:
    """
    Validate a handle and build suggestions for any rule it breaks.

    Rules run in a fixed order and each one appends its own error and
    (optionally) a suggestion. Only the empty check short-circuits.

    Args:
        raw: Handle as typed, with or without a leading '@'

    Returns:
        ValidationOutcome with errors in rule order and up to
        MAX_SUGGESTIONS suggestions
    """
    handle = normalize_handle(raw)

    if not handle:
        return ValidationOutcome(is_valid=False, errors=[EMPTY_MESSAGE])

    errors: list[str] = []
    suggestions: list[str] = []

    if len(handle) > MAX_HANDLE_LENGTH:
        errors.append(LENGTH_MESSAGE)
        suggestions.append(handle[:MAX_HANDLE_LENGTH])

    if DISALLOWED_CHARS.search(handle):
        errors.append(CHARSET_MESSAGE)
        cleaned = DISALLOWED_CHARS.sub("", handle)
        if cleaned:
            suggestions.append(cleaned)

    # ASCII digits only (str.isdigit() matches other scripts too)
    if handle[0] in "0123456789":
        errors.append(LEADING_DIGIT_MESSAGE)
        suggestions.append(f"user{handle}")

    if "__" in handle:
        errors.append(CONSECUTIVE_UNDERSCORE_MESSAGE)
        suggestions.append(UNDERSCORE_RUN.sub("_", handle))

    if handle.startswith("_") or handle.endswith("_"):
        errors.append(EDGE_UNDERSCORE_MESSAGE)
        trimmed = handle.strip("_")
        if trimmed:
            suggestions.append(trimmed)

    return ValidationOutcome(
        is_valid=not errors,
        errors=errors,
        suggestions=suggestions[:MAX_SUGGESTIONS],
    )
