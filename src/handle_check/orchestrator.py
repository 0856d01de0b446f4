"""
Debounced availability checking for handle-check.

The orchestrator turns a stream of raw edits into AvailabilityState
snapshots. Each edit restarts a debounce timer; once input settles it is
validated and, if well-formed, checked against the remote service.

Every edit bumps a sequence number. Debounce timers and remote checks carry
the sequence number that was current when they started, and anything that
finishes under an older number is dropped. A superseded remote call is never
cancelled, only ignored.
"""

import asyncio
import dataclasses
import logging
from collections.abc import Awaitable, Callable

from .models import Availability, AvailabilityState
from .validation import ValidationOutcome, normalize_handle, validate_handle

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5
CHECK_FAILED_MESSAGE = "Unable to check availability - please try again"

CheckExists = Callable[[str], Awaitable[Availability]]
Listener = Callable[[AvailabilityState], None]
Validator = Callable[[str], ValidationOutcome]


class AvailabilityOrchestrator:
    """
    Owns the AvailabilityState for one input field.

    All methods must run on the same event loop. State changes are published
    to subscribers as snapshots.
    """

    def __init__(
        self,
        check_exists: CheckExists,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        validator: Validator = validate_handle,
    ):
        """
        Initialize the orchestrator.

        Args:
            check_exists: Async callable returning the Availability of a handle
            debounce_seconds: Quiet period after the last edit before checking
            validator: Format validator applied to settled input
        """
        self.check_exists = check_exists
        self.debounce_seconds = debounce_seconds
        self.validator = validator

        self._state = AvailabilityState()
        self._seq = 0
        self._listeners: list[Listener] = []
        self._timer: asyncio.Task | None = None
        self._inflight: asyncio.Task | None = None
        # Strong refs so superseded checks are not garbage collected mid-flight
        self._checks: set[asyncio.Task] = set()

    @property
    def state(self) -> AvailabilityState:
        """Snapshot of the current state."""
        return self._state.snapshot()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def submit(self, raw_input: str) -> None:
        """
        Record a user edit and restart the debounce timer.

        Any pending timer is cancelled and any in-flight check becomes stale.
        """
        loop = asyncio.get_running_loop()

        self._seq += 1
        self._cancel_timer()
        self._inflight = None

        self._state.raw_input = raw_input
        self._state.is_typing = True
        self._timer = loop.create_task(self._debounce(self._seq, raw_input))
        self._publish()

    def apply_suggestion(self, suggestion: str) -> None:
        """Use a suggestion as the new input, exactly like a user edit."""
        logger.debug(f"Applying suggestion {suggestion!r}")
        self.submit(suggestion)

    async def wait_idle(self) -> None:
        """Wait until input has settled and the current check has resolved."""
        while True:
            pending = [
                task
                for task in (self._timer, self._inflight)
                if task is not None and not task.done()
            ]
            if not pending:
                return
            await asyncio.wait(pending)

    def close(self) -> None:
        """Cancel the pending debounce timer and publish the settled state."""
        pending = self._timer is not None and not self._timer.done()
        self._cancel_timer()
        if pending:
            self._state.is_typing = False
            self._publish()

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _debounce(self, seq: int, raw_input: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        if seq != self._seq:
            logger.debug(f"Debounce timer {seq} superseded by {self._seq}")
            return
        self._settle(seq, raw_input)

    def _settle(self, seq: int, raw_input: str) -> None:
        """Validate settled input and dispatch the remote check if well-formed."""
        if not normalize_handle(raw_input).strip():
            self._state = AvailabilityState(raw_input=raw_input)
            self._publish()
            return

        validation = self.validator(raw_input)

        state = self._state
        state.is_typing = False
        state.validation = validation
        state.exists = Availability.UNKNOWN
        state.is_checking = validation.is_valid
        self._publish()

        if not validation.is_valid:
            return

        task = asyncio.get_running_loop().create_task(self._run_check(seq, state.handle))
        self._checks.add(task)
        task.add_done_callback(self._checks.discard)
        self._inflight = task

    async def _run_check(self, seq: int, handle: str) -> None:
        try:
            result = Availability(await self.check_exists(handle))
        except Exception as e:
            if seq != self._seq:
                logger.debug(f"Ignoring failed check for stale input @{handle}")
                return
            logger.warning(f"Availability check failed for @{handle}: {e}")
            self._state.exists = Availability.UNKNOWN
            self._state.is_checking = False
            validation = self._state.validation
            if validation is not None:
                # Validators may hand back shared outcomes; never mutate them
                self._state.validation = dataclasses.replace(
                    validation, errors=[*validation.errors, CHECK_FAILED_MESSAGE]
                )
            self._publish()
            return

        if seq != self._seq:
            logger.debug(f"Ignoring {result.value} result for stale input @{handle}")
            return

        self._state.exists = result
        self._state.is_checking = False
        self._publish()

    def _publish(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state.snapshot())
            except Exception:
                logger.exception("State listener failed")
