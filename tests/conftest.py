"""Shared pytest fixtures for handle-check tests."""

import asyncio

import pytest

from handle_check.models import Availability


class ControlledChecker:
    """Remote check stand-in whose calls resolve only when a test says so."""

    def __init__(self):
        self.calls: list[str] = []
        self._futures: list[asyncio.Future] = []

    async def __call__(self, handle: str) -> Availability:
        self.calls.append(handle)
        future = asyncio.get_running_loop().create_future()
        self._futures.append(future)
        return await future

    def resolve(self, index: int, result: Availability) -> None:
        self._futures[index].set_result(result)

    def fail(self, index: int, error: Exception) -> None:
        self._futures[index].set_exception(error)

    async def wait_for_calls(self, count: int, timeout: float = 2.0) -> None:
        """Wait until at least `count` checks have been dispatched."""

        async def _poll():
            while len(self.calls) < count:
                await asyncio.sleep(0.001)

        await asyncio.wait_for(_poll(), timeout)


@pytest.fixture
def checker():
    """A remote check whose results the test controls."""
    return ControlledChecker()


@pytest.fixture
def states():
    """List to collect published state snapshots."""
    return []
