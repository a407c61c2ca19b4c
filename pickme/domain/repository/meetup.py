"""Meetup repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pickme.domain.model.meetup import Meetup
from pickme.domain.value import MatchId, MeetupId


class MeetupRepository(ABC):
    """Repository for Meetup entity."""

    @abstractmethod
    async def find_by_id(self, meetup_id: MeetupId) -> Optional[Meetup]:
        """Find a meetup by ID.

        Args:
            meetup_id: The meetup's unique identifier

        Returns:
            The meetup if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_match(self, match_id: MatchId) -> Optional[Meetup]:
        """Find the meetup created for a match.

        Args:
            match_id: The match ID

        Returns:
            The meetup if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, meetup: Meetup) -> Meetup:
        """Insert a new meetup.

        Args:
            meetup: The meetup to insert

        Returns:
            The saved meetup

        Raises:
            IntegrityError: If a meetup already exists for the match
        """
        pass

    @abstractmethod
    async def update(self, meetup: Meetup) -> Meetup:
        """Write a changed meetup back, guarded by its version.

        Args:
            meetup: The meetup carrying the version it was read at

        Returns:
            The stored meetup with its version bumped

        Raises:
            StorageConflictError: If the stored version no longer matches
        """
        pass
