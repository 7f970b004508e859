#!/usr/bin/env python3
"""
Basic Usage Example - Presence Status Tracker

This script demonstrates the status tracker against the in-process
authority. It shows how to:
- Start a tracker for a role
- List the statuses offered to that role
- Request transitions, including the confirmed Evaluation status
- Watch local ticking and the periodic resync

Run: python examples/basic_usage.py
"""

import asyncio

from presence_app.config.loader import ConfigLoader
from presence_app.logging.config import configure_logging
from presence_app.models.status import Role, StatusKey
from presence_app.remote.memory_authority import InMemoryRemoteAuthority
from presence_app.tracker import StatusTracker


def print_rows(tracker: StatusTracker) -> None:
    print(f"Live status: {tracker.status.value}")
    for row in tracker.duration_rows():
        limit = f" / {row.limit_label}" if row.limit_label else ""
        flag = "  (!)" if row.exceeded else ""
        print(f"  {row.status.value:<11} {row.formatted}{limit}{flag}")


async def run_demo() -> None:
    config = ConfigLoader.create().load(overrides={
        "timing": {"resync_interval_seconds": 3.0},
    })
    authority = InMemoryRemoteAuthority(Role.EMPLOYEE)

    def confirm(prompt: str) -> bool:
        print(f"[confirm] {prompt} -> yes")
        return True

    async with StatusTracker(
        authority,
        Role.EMPLOYEE,
        config=config,
        confirm=confirm,
        notify=lambda message: print(f"[alert] {message}"),
    ) as tracker:
        print("Offered:", ", ".join(s.value for s in tracker.offered_statuses()))

        await tracker.request_transition(StatusKey.ONLINE)
        await asyncio.sleep(2.5)
        print_rows(tracker)

        await tracker.request_transition(StatusKey.BREAK)
        await asyncio.sleep(4)
        print_rows(tracker)

        await tracker.request_transition(StatusKey.EVALUATION)
        print_rows(tracker)

    # An HR session is refused On-call by the authority itself
    hr = StatusTracker(
        InMemoryRemoteAuthority(Role.HR),
        Role.HR,
        notify=lambda message: print(f"[alert] {message}"),
    )
    result = await hr.request_transition(StatusKey.ON_CALL)
    print(f"HR -> On-call: {result.outcome.value}")
    hr.stop()


if __name__ == "__main__":
    configure_logging(level="WARNING")
    asyncio.run(run_demo())
