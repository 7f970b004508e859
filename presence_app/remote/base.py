"""Base contract for remote status authorities."""

from abc import ABC, abstractmethod

from ..models.status import StatusKey, StatusSnapshot


class RemoteAuthority(ABC):
    """
    Transport-agnostic contract of the authoritative status source.

    Implementations must re-validate the caller's role on every
    post_transition; the client-side permission table only filters
    which transitions are offered.
    """

    @abstractmethod
    async def fetch_current(self) -> StatusSnapshot:
        """
        Fetch the current status and today's durations.

        Raises:
            RemoteAuthorityError: On transport or decoding failure
        """
        pass

    @abstractmethod
    async def post_transition(self, new_status: StatusKey) -> StatusSnapshot:
        """
        Request a status change and return the resulting snapshot.

        Raises:
            PermissionDeniedError: If the caller's role may not select new_status
            RemoteAuthorityError: On any other failure, carrying the
                server-provided message when there is one
        """
        pass
