"""
Data models for handle-check.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .validation import ValidationOutcome, normalize_handle

PROFILE_URL_BASE = "https://twitter.com"


class Availability(str, Enum):
    """Outcome of a remote existence check."""

    TAKEN = "taken"
    AVAILABLE = "available"
    UNKNOWN = "unknown"  # not checked yet, or the check failed


class DisplayStatus(str, Enum):
    """Mutually exclusive display states for a rendered handle check."""

    IDLE = "idle"
    CHECKING = "checking"
    INVALID = "invalid"
    TAKEN = "taken"
    AVAILABLE = "available"
    UNKNOWN = "unknown"


# headline, detail
STATUS_MESSAGES: dict[DisplayStatus, tuple[str, str]] = {
    DisplayStatus.IDLE: (
        "Enter a username",
        "Check if your desired username is valid and available",
    ),
    DisplayStatus.CHECKING: (
        "Checking availability...",
        "Please wait while we verify availability...",
    ),
    DisplayStatus.INVALID: ("Format is invalid", "Fix the issues below or pick a suggestion"),
    DisplayStatus.TAKEN: ("Username is taken", "Try a different username"),
    DisplayStatus.AVAILABLE: ("Username is available!", "This username is free to use!"),
    DisplayStatus.UNKNOWN: ("Unable to check availability", "Check manually on Twitter"),
}


@dataclass
class AvailabilityState:
    """
    Everything a renderer needs to show the current handle check.

    Owned and mutated only by AvailabilityOrchestrator; listeners receive
    snapshots.
    """

    raw_input: str = ""
    validation: ValidationOutcome | None = None
    exists: Availability = Availability.UNKNOWN
    is_checking: bool = False
    is_typing: bool = False

    @property
    def handle(self) -> str:
        """Normalized handle for the committed input."""
        return normalize_handle(self.raw_input)

    def snapshot(self) -> "AvailabilityState":
        """Return an independent copy safe to hand to listeners."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "raw_input": self.raw_input,
            "handle": self.handle,
            "validation": self.validation.to_dict() if self.validation else None,
            "exists": self.exists.value,
            "is_checking": self.is_checking,
            "is_typing": self.is_typing,
            "status": display_status(self).value,
        }


def display_status(state: AvailabilityState) -> DisplayStatus:
    """Derive the display state from an availability state."""
    if state.is_typing or state.is_checking:
        return DisplayStatus.CHECKING
    if state.validation is None:
        return DisplayStatus.IDLE
    if not state.validation.is_valid:
        return DisplayStatus.INVALID
    if state.exists is Availability.TAKEN:
        return DisplayStatus.TAKEN
    if state.exists is Availability.AVAILABLE:
        return DisplayStatus.AVAILABLE
    return DisplayStatus.UNKNOWN


def status_message(status: DisplayStatus) -> tuple[str, str]:
    """Headline and detail text for a display state."""
    return STATUS_MESSAGES[status]


def profile_url(handle: str) -> str:
    """Public profile URL for a handle."""
    return f"{PROFILE_URL_BASE}/{normalize_handle(handle)}"
