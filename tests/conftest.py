"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Any, Dict, Optional

import pytest

from presence_app.models.status import StatusKey, StatusSnapshot
from presence_app.remote.base import RemoteAuthority
from presence_app.state.store import Lifetime, StatusStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedAuthority(RemoteAuthority):
    """
    Remote authority returning queued snapshots or errors.

    When `gate` is set, post_transition waits on it, which keeps a
    request in flight until the test releases it.
    """

    def __init__(self, snapshot: Optional[StatusSnapshot] = None):
        self.snapshot = snapshot or StatusSnapshot(StatusKey.OFFLINE, {})
        self.fetch_error: Optional[Exception] = None
        self.transition_error: Optional[Exception] = None
        self.transition_echo: Optional[StatusSnapshot] = None
        self.gate: Optional[asyncio.Event] = None
        self.fetch_calls = 0
        self.transition_calls: list[StatusKey] = []

    async def fetch_current(self) -> StatusSnapshot:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.snapshot

    async def post_transition(self, new_status: StatusKey) -> StatusSnapshot:
        self.transition_calls.append(new_status)
        if self.gate is not None:
            await self.gate.wait()
        if self.transition_error is not None:
            raise self.transition_error
        if self.transition_echo is not None:
            return self.transition_echo
        return StatusSnapshot(new_status, dict(self.snapshot.durations))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=1000.0)


@pytest.fixture
def store() -> StatusStore:
    return StatusStore()


@pytest.fixture
def lifetime() -> Lifetime:
    return Lifetime()


@pytest.fixture
def authority() -> ScriptedAuthority:
    return ScriptedAuthority(
        StatusSnapshot(StatusKey.ONLINE, {StatusKey.ONLINE: 600, StatusKey.BREAK: 120})
    )


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    """Sample `/attendance/current` response body."""
    return {
        "currentStatus": "Break",
        "durations": {
            "Online": 3665,
            "Break": 300,
            "Lunch Time": 1800,
            "Offline": 40000,
        },
    }


@pytest.fixture
def scripted_authority():
    """Factory for ScriptedAuthority instances."""
    return ScriptedAuthority
