"""
Session state for the presence tracker.

StatusStore is the single source of truth for the current status and the
per-status durations. It has two producers: authoritative snapshots written
by the SyncAgent, and speculative one-second increments written by the
Ticker. A snapshot replaces the whole Session; it never merges with
increments that raced with it.
"""

from typing import Callable, Mapping, Optional

from ..logging.config import get_state_logger, log_status_transition
from ..models.status import DEFAULT_STATUS, DurationMap, StatusKey

state_logger = get_state_logger(__name__)

StoreListener = Callable[["StatusStore"], None]


class Lifetime:
    """Cancellation token tied to the lifetime of one Session."""

    def __init__(self) -> None:
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def cancel(self) -> None:
        self._alive = False


class StatusStore:
    """Holds the current status, the DurationMap and the busy flag."""

    def __init__(self) -> None:
        self._status: StatusKey = DEFAULT_STATUS
        self._durations: DurationMap = {}
        self._busy = False
        self._listeners: list[StoreListener] = []

    def current_status(self) -> StatusKey:
        return self._status

    def durations(self) -> DurationMap:
        """Return a copy of the duration mapping."""
        return dict(self._durations)

    def seconds_in(self, status: StatusKey) -> int:
        """Seconds accrued in a status; absent keys are zero."""
        return self._durations.get(status, 0)

    @property
    def busy(self) -> bool:
        """True while a transition request is in flight."""
        return self._busy

    def set_busy(self, busy: bool) -> None:
        if self._busy != busy:
            self._busy = busy
            self._notify()

    def apply_snapshot(
        self,
        status: StatusKey,
        durations: Mapping[StatusKey, int],
        trigger: str = "snapshot"
    ) -> None:
        """
        Replace the current status and the entire duration mapping.

        Authoritative write; any speculative increments are discarded.
        """
        previous = self._status
        self._status = status
        self._durations = dict(durations)

        if previous != status:
            log_status_transition(
                state_logger,
                from_status=previous.value,
                to_status=status.value,
                trigger=trigger,
            )
        self._notify()

    def increment_active(self) -> None:
        """Add one second to the current status bucket unless Offline."""
        if self._status == StatusKey.OFFLINE:
            return
        self._durations[self._status] = self._durations.get(self._status, 0) + 1
        self._notify()

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a listener called after every write.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                # A failing listener must not stop the Ticker or the SyncAgent
                state_logger.exception(
                    "Store listener failed",
                    status=self._status.value,
                )


def new_session(listener: Optional[StoreListener] = None) -> tuple[StatusStore, Lifetime]:
    """Create a Session with default values and its lifetime token."""
    store = StatusStore()
    if listener is not None:
        store.subscribe(listener)
    return store, Lifetime()
