"""
Status tracker coordinator.

Owns one Session lifetime and wires the StatusStore, Ticker, SyncAgent,
permission table and threshold evaluation together:

    RemoteAuthority → SyncAgent ─┐
                                 ├→ StatusStore → ThresholdEvaluator → rows
    Ticker ──────────────────────┘
"""

from typing import Callable, Optional

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .models.status import (
    DurationMap,
    Role,
    StatusKey,
    StatusRow,
    TransitionResult,
)
from .remote.base import RemoteAuthority
from .state.permissions import PermissionTable
from .state.store import StatusStore, new_session
from .state.thresholds import ThresholdEvaluator, ThresholdTable
from .sync.agent import Confirm, Notify, SyncAgent
from .sync.ticker import Ticker
from .utils.formatting import format_duration, format_limit

logger = structlog.get_logger(__name__)

# Limits shown next to the counter; Offline's limit only drives emphasis
LABELLED_LIMITS = frozenset({StatusKey.BREAK, StatusKey.LUNCH_TIME})


class StatusTracker:
    """
    Live status component for a single signed-in user.

    The role is passed in explicitly and only read. Starting the tracker
    performs the initial fetch and schedules the ticker and the periodic
    resync; stopping it cancels both and drops any response that arrives
    afterwards.
    """

    def __init__(
        self,
        authority: RemoteAuthority,
        role: Role,
        config: Optional[DefaultConfig] = None,
        confirm: Optional[Confirm] = None,
        notify: Optional[Notify] = None,
        permissions: Optional[PermissionTable] = None,
        on_change: Optional[Callable[[StatusStore], None]] = None,
    ) -> None:
        self.config = config or get_default_config()
        self.role = role
        self.permissions = permissions or PermissionTable()
        self.evaluator = ThresholdEvaluator(ThresholdTable.from_params(self.config.thresholds))

        self.store, self.lifetime = new_session(on_change)
        self.ticker = Ticker(
            self.store,
            self.lifetime,
            interval_seconds=self.config.timing.tick_interval_seconds,
        )
        self.agent = SyncAgent(
            authority,
            self.store,
            self.lifetime,
            resync_interval_seconds=self.config.timing.resync_interval_seconds,
            confirm=confirm,
            notify=notify,
            messages=self.config.messages,
        )
        self._started = False

    async def start(self) -> bool:
        """
        Start ticking and periodic resync, then perform the initial fetch.

        Returns:
            True if the initial snapshot was applied
        """
        if not self.lifetime.alive:
            raise RuntimeError("StatusTracker cannot be restarted after stop()")
        if self._started:
            return False
        self._started = True

        self.ticker.start()
        self.agent.start_periodic()
        applied = await self.agent.initial_fetch()

        logger.info(
            "Status tracker started",
            role=self.role.value,
            status=self.store.current_status().value,
            initial_snapshot=applied,
        )
        return applied

    def stop(self) -> None:
        """Tear down the Session: cancel timers and mark the lifetime dead."""
        if not self.lifetime.alive:
            return
        self.lifetime.cancel()
        self.ticker.cancel()
        self.agent.cancel()
        logger.info("Status tracker stopped", role=self.role.value)

    async def __aenter__(self) -> "StatusTracker":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.stop()

    @property
    def status(self) -> StatusKey:
        return self.store.current_status()

    @property
    def durations(self) -> DurationMap:
        return self.store.durations()

    @property
    def busy(self) -> bool:
        return self.store.busy

    def offered_statuses(self) -> list[StatusKey]:
        """Statuses the role is offered in the status menu."""
        return self.permissions.offered_transitions(self.role)

    def exceeded(self, status: StatusKey) -> bool:
        return self.evaluator.exceeded(status, self.store.durations())

    def duration_rows(self) -> list[StatusRow]:
        """Time utilization rows for the statuses this role can see."""
        durations = self.store.durations()
        rows = []
        for status in self.offered_statuses():
            seconds = durations.get(status, 0)
            limit = self.evaluator.table.limit(status)
            rows.append(StatusRow(
                status=status,
                seconds=seconds,
                formatted=format_duration(seconds),
                limit_label=format_limit(limit) if limit is not None and status in LABELLED_LIMITS else None,
                exceeded=self.evaluator.exceeded(status, durations),
            ))
        return rows

    async def request_transition(self, new_status: StatusKey) -> TransitionResult:
        return await self.agent.request_transition(new_status)
