"""Match repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pickme.domain.model.match import Match
from pickme.domain.value import MatchId, PickRequestId, UserId


class MatchRepository(ABC):
    """Repository for Match entity.

    Defines the contract for match persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID.

        Args:
            match_id: The match's unique identifier

        Returns:
            The match if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_request_and_picker(
        self, pick_request_id: PickRequestId, picker_id: UserId
    ) -> Optional[Match]:
        """Find the match a picker made on a pick request, whatever its status.

        Args:
            pick_request_id: The pick request ID
            picker_id: The picker's user ID

        Returns:
            The match if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[Match]:
        """Find matches where the user is picker or requester, newest first.

        Args:
            user_id: The user's ID

        Returns:
            List of matches
        """
        pass

    @abstractmethod
    async def save(self, match: Match) -> Match:
        """Insert a new match.

        Args:
            match: The match to insert

        Returns:
            The saved match

        Raises:
            IntegrityError: If a match already exists for this pick request and picker
        """
        pass

    @abstractmethod
    async def update(self, match: Match) -> Match:
        """Write a changed match back, guarded by its version.

        Args:
            match: The match carrying the version it was read at

        Returns:
            The stored match with its version bumped

        Raises:
            StorageConflictError: If the stored version no longer matches
        """
        pass
