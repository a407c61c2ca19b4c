"""In-memory meetup repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from pickme.domain.error import StorageConflictError
from pickme.domain.model.meetup import Meetup
from pickme.domain.repository.meetup import MeetupRepository
from pickme.domain.value import MatchId, MeetupId

from .base import InMemoryStore


class InMemoryMeetupRepository(InMemoryStore, MeetupRepository):
    """In-memory implementation of MeetupRepository for testing."""

    _state_attrs = ("_meetups",)

    def __init__(self) -> None:
        self._meetups: dict[MeetupId, Meetup] = {}

    async def find_by_id(self, meetup_id: MeetupId) -> Optional[Meetup]:
        """Find a meetup by ID."""
        return self._meetups.get(meetup_id)

    async def find_by_match(self, match_id: MatchId) -> Optional[Meetup]:
        """Find the meetup for a match."""
        for meetup in self._meetups.values():
            if meetup.match_id == match_id:
                return meetup
        return None

    async def save(self, meetup: Meetup) -> Meetup:
        """Insert a new meetup.

        Raises:
            IntegrityError: If the match already has a meetup
        """
        if await self.find_by_match(meetup.match_id):
            raise IntegrityError("Duplicate meetup", None, Exception())

        self._meetups[meetup.id] = meetup
        return meetup

    async def update(self, meetup: Meetup) -> Meetup:
        """Write back a changed meetup, guarded by its version."""
        stored = self._meetups.get(meetup.id)
        if stored is None or stored.version != meetup.version:
            raise StorageConflictError(
                f"Meetup {meetup.id} changed since version {meetup.version}"
            )
        updated = meetup.model_copy(update={"version": meetup.version + 1})
        self._meetups[meetup.id] = updated
        return updated
