"""In-process remote authority."""

import asyncio
import time
from typing import Callable, Optional

from ..errors import PermissionDeniedError
from ..logging.config import get_sync_logger
from ..models.status import DEFAULT_STATUS, Role, StatusKey, StatusSnapshot
from ..state.permissions import PermissionTable
from .base import RemoteAuthority

logger = get_sync_logger(__name__)


class InMemoryRemoteAuthority(RemoteAuthority):
    """
    Authoritative status source kept in process memory.

    Accrues wall time into the current status (Offline included) from an
    injectable clock, and re-validates the role on every transition.
    Shared by several trackers it behaves like one server seen from
    several devices.
    """

    def __init__(
        self,
        role: Role,
        permissions: Optional[PermissionTable] = None,
        clock: Callable[[], float] = time.monotonic,
        initial_status: StatusKey = DEFAULT_STATUS,
        latency_seconds: float = 0.0,
    ):
        self.role = role
        self.permissions = permissions or PermissionTable()
        self.clock = clock
        self.latency_seconds = latency_seconds

        self._status = initial_status
        self._elapsed: dict[StatusKey, float] = {}
        self._since = clock()
        self.fetch_count = 0
        self.transition_count = 0

    async def fetch_current(self) -> StatusSnapshot:
        self.fetch_count += 1
        await self._simulate_latency()
        self._accrue()
        return self._snapshot()

    async def post_transition(self, new_status: StatusKey) -> StatusSnapshot:
        self.transition_count += 1
        await self._simulate_latency()

        if not self.permissions.is_allowed(self.role, new_status):
            logger.warning(
                "Rejected transition not permitted for role",
                role=self.role.value,
                requested_status=new_status.value,
            )
            raise PermissionDeniedError(
                f"Status {new_status.value!r} is not permitted for role {self.role.value}",
                server_message=f"{self.role.value} cannot select {new_status.value}",
                status_code=403,
                role=self.role.value,
                requested_status=new_status.value,
            )

        self._accrue()
        self._status = new_status
        return self._snapshot()

    async def _simulate_latency(self) -> None:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)

    def _accrue(self) -> None:
        now = self.clock()
        self._elapsed[self._status] = self._elapsed.get(self._status, 0.0) + max(0.0, now - self._since)
        self._since = now

    def _snapshot(self) -> StatusSnapshot:
        return StatusSnapshot(
            status=self._status,
            durations={k: int(v) for k, v in self._elapsed.items()},
        )
