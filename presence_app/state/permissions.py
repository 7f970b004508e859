"""
Role permission table.

Determines which statuses a role is offered. This is a usability filter
for the status menu, not a security boundary: the remote authority
re-validates every transition on its side.
"""

from typing import Mapping, Optional

from ..models.status import STATUS_ORDER, Role, StatusKey

# On-call and Evaluation are Employee-exclusive
_SHARED_STATUSES = frozenset({
    StatusKey.ONLINE,
    StatusKey.BREAK,
    StatusKey.LUNCH_TIME,
    StatusKey.OFFLINE,
})

DEFAULT_PERMISSIONS: Mapping[Role, frozenset[StatusKey]] = {
    Role.EMPLOYEE: frozenset(STATUS_ORDER),
    Role.BRANCH_MANAGER: _SHARED_STATUSES,
    Role.HR: _SHARED_STATUSES,
}


class PermissionTable:
    """Static mapping from role to the statuses that role may select."""

    def __init__(self, permissions: Optional[Mapping[Role, frozenset[StatusKey]]] = None):
        self._permissions = dict(permissions if permissions is not None else DEFAULT_PERMISSIONS)

    def allowed(self, role: Role) -> frozenset[StatusKey]:
        """Statuses the role may select; unknown roles may select nothing."""
        return self._permissions.get(role, frozenset())

    def is_allowed(self, role: Role, status: StatusKey) -> bool:
        return status in self.allowed(role)

    def offered_transitions(self, role: Role) -> list[StatusKey]:
        """Statuses to offer in the menu, in display order."""
        allowed = self.allowed(role)
        return [status for status in STATUS_ORDER if status in allowed]

