"""In-memory match repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from pickme.domain.error import StorageConflictError
from pickme.domain.model.match import Match
from pickme.domain.repository.constraint import MATCH_REQUEST_PICKER_UNIQUE
from pickme.domain.repository.match import MatchRepository
from pickme.domain.value import MatchId, PickRequestId, UserId

from .base import InMemoryStore


class InMemoryMatchRepository(InMemoryStore, MatchRepository):
    """In-memory implementation of MatchRepository for testing."""

    _state_attrs = ("_matches",)

    def __init__(self) -> None:
        self._matches: dict[MatchId, Match] = {}

    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID."""
        return self._matches.get(match_id)

    async def find_by_request_and_picker(
        self, pick_request_id: PickRequestId, picker_id: UserId
    ) -> Optional[Match]:
        """Find the match a picker made on a pick request."""
        for match in self._matches.values():
            if match.pick_request_id == pick_request_id and match.picker_id == picker_id:
                return match
        return None

    async def find_by_user(self, user_id: UserId) -> list[Match]:
        """Find matches where the user is on either side, newest first."""
        matches = [m for m in self._matches.values() if m.involves(user_id)]
        matches.sort(key=lambda m: m.created_at, reverse=True)
        return matches

    async def save(self, match: Match) -> Match:
        """Insert a new match.

        Raises:
            IntegrityError: If the (pick request, picker) pair already exists
        """
        if await self.find_by_request_and_picker(match.pick_request_id, match.picker_id):
            raise IntegrityError(
                "INSERT INTO matches",
                None,
                Exception(
                    "duplicate key value violates unique constraint "
                    f'"{MATCH_REQUEST_PICKER_UNIQUE}"'
                ),
            )

        self._matches[match.id] = match
        return match

    async def update(self, match: Match) -> Match:
        """Write back a changed match, guarded by its version."""
        stored = self._matches.get(match.id)
        if stored is None or stored.version != match.version:
            raise StorageConflictError(
                f"Match {match.id} changed since version {match.version}"
            )
        updated = match.model_copy(update={"version": match.version + 1})
        self._matches[match.id] = updated
        return updated
