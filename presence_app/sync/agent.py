"""
Authoritative synchronization against the remote authority.

The SyncAgent owns the three authoritative write paths into a StatusStore:
the initial fetch, the periodic resync, and user-triggered transition
requests. Every response is checked against the Session lifetime before it
is applied, so a response that resolves after teardown is dropped.
"""

import asyncio
from typing import Callable, Optional

from ..config.defaults import MessageParams
from ..errors import RemoteAuthorityError, SyncError
from ..logging.config import get_sync_logger
from ..models.status import (
    StatusKey,
    StatusSnapshot,
    TransitionOutcome,
    TransitionResult,
)
from ..remote.base import RemoteAuthority
from ..state.store import Lifetime, StatusStore

logger = get_sync_logger(__name__)

Confirm = Callable[[str], bool]
Notify = Callable[[str], None]

# Statuses that need an explicit user confirmation before being requested
CONFIRMATION_REQUIRED = frozenset({StatusKey.EVALUATION})


def _always_confirm(prompt: str) -> bool:
    return True


def _log_only(message: str) -> None:
    logger.warning("Transition error surfaced", message=message)


class SyncAgent:
    """Initial fetch, periodic resync and transition requests for one Session."""

    def __init__(
        self,
        authority: RemoteAuthority,
        store: StatusStore,
        lifetime: Lifetime,
        resync_interval_seconds: float = 30.0,
        confirm: Optional[Confirm] = None,
        notify: Optional[Notify] = None,
        messages: Optional[MessageParams] = None,
    ):
        self.authority = authority
        self.store = store
        self.lifetime = lifetime
        self.resync_interval_seconds = resync_interval_seconds
        self.confirm = confirm or _always_confirm
        self.notify = notify or _log_only
        self.messages = messages or MessageParams()
        self._resync_task: Optional[asyncio.Task] = None

    async def fetch_snapshot(self, phase: str) -> StatusSnapshot:
        """
        Fetch the current authoritative snapshot.

        Raises:
            SyncError: If the authority could not be reached or decoded
        """
        try:
            return await self.authority.fetch_current()
        except RemoteAuthorityError as e:
            raise SyncError(f"Failed to fetch status: {e}", phase=phase, cause=e)

    async def _sync(self, phase: str) -> bool:
        try:
            snapshot = await self.fetch_snapshot(phase)
        except SyncError as e:
            # Session keeps its last known value until the next resync
            logger.warning(
                "Status sync failed",
                phase=phase,
                error=str(e.cause or e),
            )
            return False

        if not self.lifetime.alive:
            logger.debug("Discarding snapshot received after teardown", phase=phase)
            return False

        self.store.apply_snapshot(snapshot.status, snapshot.durations, trigger=phase)
        logger.debug(
            "Applied authoritative snapshot",
            phase=phase,
            status=snapshot.status.value,
        )
        return True

    async def initial_fetch(self) -> bool:
        """Populate the Session once at startup. Returns True if applied."""
        return await self._sync("initial_fetch")

    async def resync_once(self) -> bool:
        """Refetch and overwrite any drift from local ticking. Returns True if applied."""
        return await self._sync("resync")

    @property
    def resync_running(self) -> bool:
        return self._resync_task is not None and not self._resync_task.done()

    def start_periodic(self) -> asyncio.Task:
        """Schedule the periodic resync loop on the running event loop."""
        if self.resync_running:
            return self._resync_task  # type: ignore[return-value]
        self._resync_task = asyncio.get_running_loop().create_task(
            self._run_periodic(), name="presence-resync"
        )
        return self._resync_task

    def cancel(self) -> None:
        if self._resync_task is not None:
            self._resync_task.cancel()
            self._resync_task = None

    async def _run_periodic(self) -> None:
        while self.lifetime.alive:
            await asyncio.sleep(self.resync_interval_seconds)
            if not self.lifetime.alive:
                break
            try:
                await self.resync_once()
            except Exception as e:
                # The loop outlives any single failed resync
                logger.error(
                    "Unexpected error during periodic resync",
                    error=str(e),
                    error_type=type(e).__name__,
                )

    async def request_transition(self, new_status: StatusKey) -> TransitionResult:
        """
        Ask the authority to change the current status.

        Same-status requests and declined confirmations return without a
        network call. At most one request is in flight at a time; a call
        made while busy is rejected. Session is only changed by the
        authority's echo, never optimistically.
        """
        if not self.lifetime.alive:
            return TransitionResult(TransitionOutcome.DISCARDED, new_status)

        if self.store.busy:
            logger.info(
                "Rejected transition while another is in flight",
                requested_status=new_status.value,
            )
            return TransitionResult(TransitionOutcome.BUSY, new_status)

        current = self.store.current_status()
        if new_status == current:
            return TransitionResult(TransitionOutcome.NO_OP, new_status)

        if new_status in CONFIRMATION_REQUIRED:
            if not self.confirm(self.messages.evaluation_prompt):
                logger.info("Transition declined by user", requested_status=new_status.value)
                return TransitionResult(TransitionOutcome.DECLINED, new_status)

        self.store.set_busy(True)
        try:
            snapshot = await self.authority.post_transition(new_status)
        except RemoteAuthorityError as e:
            message = e.server_message or self.messages.transition_failed
            logger.warning(
                "Status transition failed",
                from_status=current.value,
                requested_status=new_status.value,
                status_code=e.status_code,
                error=str(e),
            )
            if not self.lifetime.alive:
                return TransitionResult(TransitionOutcome.DISCARDED, new_status, message)
            self.notify(message)
            return TransitionResult(TransitionOutcome.FAILED, new_status, message)
        finally:
            self.store.set_busy(False)

        if not self.lifetime.alive:
            logger.debug(
                "Discarding transition echo received after teardown",
                requested_status=new_status.value,
            )
            return TransitionResult(TransitionOutcome.DISCARDED, new_status)

        self.store.apply_snapshot(snapshot.status, snapshot.durations, trigger="transition")
        return TransitionResult(TransitionOutcome.APPLIED, new_status)
