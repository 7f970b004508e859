"""
Status data models for presence tracking.

This module defines the closed status and role enumerations, the immutable
authoritative snapshot, and the result types returned by transition requests.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from ..errors import MalformedSnapshotError
from ..logging.config import get_logger

logger = get_logger(__name__)


class StatusKey(str, Enum):
    """Mutually exclusive activity states, valued by their wire names."""
    ONLINE = "Online"
    ON_CALL = "On-call"
    BREAK = "Break"
    LUNCH_TIME = "Lunch Time"
    EVALUATION = "Evaluation"
    OFFLINE = "Offline"


class Role(str, Enum):
    """User roles that determine which statuses are offered."""
    BRANCH_MANAGER = "BranchManager"
    HR = "HR"
    EMPLOYEE = "Employee"


# Display order of statuses, matching the status menu
STATUS_ORDER: tuple[StatusKey, ...] = (
    StatusKey.ONLINE,
    StatusKey.ON_CALL,
    StatusKey.BREAK,
    StatusKey.LUNCH_TIME,
    StatusKey.EVALUATION,
    StatusKey.OFFLINE,
)

DEFAULT_STATUS = StatusKey.OFFLINE

DurationMap = dict[StatusKey, int]


def parse_status(value: Any) -> StatusKey:
    """
    Parse a wire status name into a StatusKey.

    Raises:
        MalformedSnapshotError: If the value is not a known status
    """
    if isinstance(value, StatusKey):
        return value
    try:
        return StatusKey(value)
    except ValueError:
        raise MalformedSnapshotError(
            f"Unknown status: {value!r}",
            field_name="currentStatus",
            raw_value=value
        )


def parse_durations(raw: Optional[Mapping[str, Any]]) -> DurationMap:
    """
    Parse a wire durations mapping into a DurationMap.

    Missing mapping decodes to an empty map. Unknown buckets are logged and
    skipped. Every value must be a non-negative integer count of seconds.

    Raises:
        MalformedSnapshotError: On a non-mapping or invalid values
    """
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise MalformedSnapshotError(
            "Durations must be a mapping",
            field_name="durations",
            raw_value=raw
        )

    durations: DurationMap = {}
    for key, seconds in raw.items():
        try:
            status = StatusKey(key)
        except ValueError:
            logger.warning("Skipping unknown duration bucket", bucket=key)
            continue
        # bool is an int subclass but never a valid count
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
            raise MalformedSnapshotError(
                f"Invalid duration for {status.value}: {seconds!r}",
                field_name="durations",
                raw_value=seconds
            )
        durations[status] = seconds
    return durations


@dataclass(frozen=True)
class StatusSnapshot:
    """Authoritative status + durations pair obtained from the remote authority."""

    status: StatusKey
    durations: Mapping[StatusKey, int] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StatusSnapshot":
        """
        Decode a `{currentStatus, durations}` payload.

        A missing or empty `currentStatus` decodes to Offline and missing
        `durations` to an empty map.
        """
        if not isinstance(payload, Mapping):
            raise MalformedSnapshotError(
                "Snapshot payload must be an object",
                raw_value=payload
            )
        raw_status = payload.get("currentStatus") or DEFAULT_STATUS
        return cls(
            status=parse_status(raw_status),
            durations=parse_durations(payload.get("durations")),
        )

    def to_payload(self) -> dict[str, Any]:
        """Encode into the wire format."""
        return {
            "currentStatus": self.status.value,
            "durations": {k.value: v for k, v in self.durations.items()},
        }


class TransitionOutcome(str, Enum):
    """How a transition request concluded."""
    NO_OP = "no_op"              # Requested status is already current
    DECLINED = "declined"        # User declined the confirmation step
    BUSY = "busy"                # Another request is in flight
    APPLIED = "applied"          # Authority accepted; echo applied
    FAILED = "failed"            # Authority or transport reported an error
    DISCARDED = "discarded"      # Response arrived after teardown


@dataclass(frozen=True)
class TransitionResult:
    """Result of a single `request_transition` call."""
    outcome: TransitionOutcome
    requested: StatusKey
    error_message: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.outcome == TransitionOutcome.APPLIED


@dataclass(frozen=True)
class StatusRow:
    """One line of the time utilization display."""
    status: StatusKey
    seconds: int
    formatted: str
    limit_label: Optional[str] = None
    exceeded: bool = False
