"""Tests for availability state models and display derivation."""

from handle_check.models import (
    Availability,
    AvailabilityState,
    DisplayStatus,
    display_status,
    profile_url,
    status_message,
)
from handle_check.validation import ValidationOutcome, validate_handle


def valid_state(**kwargs) -> AvailabilityState:
    return AvailabilityState(raw_input="jack", validation=validate_handle("jack"), **kwargs)


class TestDisplayStatus:
    """Test the mapping from state to display state."""

    def test_idle_without_validation(self):
        assert display_status(AvailabilityState()) is DisplayStatus.IDLE

    def test_typing_wins(self):
        """Typing shows as checking regardless of the previous result."""
        state = valid_state(exists=Availability.TAKEN, is_typing=True)
        assert display_status(state) is DisplayStatus.CHECKING

    def test_typing_before_first_validation(self):
        state = AvailabilityState(raw_input="j", is_typing=True)
        assert display_status(state) is DisplayStatus.CHECKING

    def test_checking(self):
        assert display_status(valid_state(is_checking=True)) is DisplayStatus.CHECKING

    def test_invalid(self):
        state = AvailabilityState(raw_input="1abc", validation=validate_handle("1abc"))
        assert display_status(state) is DisplayStatus.INVALID

    def test_taken(self):
        assert display_status(valid_state(exists=Availability.TAKEN)) is DisplayStatus.TAKEN

    def test_available(self):
        assert display_status(valid_state(exists=Availability.AVAILABLE)) is DisplayStatus.AVAILABLE

    def test_unknown(self):
        assert display_status(valid_state()) is DisplayStatus.UNKNOWN

    def test_every_status_has_message(self):
        for status in DisplayStatus:
            headline, detail = status_message(status)
            assert headline
            assert detail

    def test_status_messages(self):
        assert status_message(DisplayStatus.TAKEN)[0] == "Username is taken"
        assert status_message(DisplayStatus.AVAILABLE)[0] == "Username is available!"
        assert status_message(DisplayStatus.UNKNOWN)[0] == "Unable to check availability"


class TestAvailabilityState:
    """Test AvailabilityState helpers."""

    def test_defaults(self):
        state = AvailabilityState()
        assert state.raw_input == ""
        assert state.validation is None
        assert state.exists is Availability.UNKNOWN
        assert state.is_checking is False
        assert state.is_typing is False

    def test_handle_strips_at(self):
        assert AvailabilityState(raw_input="@jack").handle == "jack"

    def test_snapshot_is_deep_copy(self):
        state = valid_state()
        snapshot = state.snapshot()
        snapshot.validation.errors.append("changed")
        snapshot.raw_input = "other"
        assert state.validation.errors == []
        assert state.raw_input == "jack"

    def test_to_dict(self):
        state = AvailabilityState(
            raw_input="@jack",
            validation=ValidationOutcome(is_valid=True),
            exists=Availability.TAKEN,
        )
        data = state.to_dict()
        assert data == {
            "raw_input": "@jack",
            "handle": "jack",
            "validation": {"is_valid": True, "errors": [], "suggestions": []},
            "exists": "taken",
            "is_checking": False,
            "is_typing": False,
            "status": "taken",
        }

    def test_to_dict_without_validation(self):
        data = AvailabilityState().to_dict()
        assert data["validation"] is None
        assert data["status"] == "idle"


class TestProfileUrl:
    """Test profile link construction."""

    def test_profile_url(self):
        assert profile_url("jack") == "https://twitter.com/jack"

    def test_profile_url_strips_at(self):
        assert profile_url("@jack") == "https://twitter.com/jack"
