"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from pickme.domain.model.user import User
from pickme.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Batch-load users by ID.

        Args:
            user_ids: User IDs to load (duplicates allowed)

        Returns:
            Mapping of user ID to user; missing IDs are absent
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def increment_completed_meetups(self, user_id: UserId) -> None:
        """Atomically increment the user's completed meetup counter by 1.

        Args:
            user_id: The user's unique identifier
        """
        pass

    @abstractmethod
    async def update_safety_score(
        self, user_id: UserId, expected: int, new_score: int
    ) -> None:
        """Compare-and-set the user's safety score.

        Args:
            user_id: The user's unique identifier
            expected: Score the caller computed from
            new_score: Score to store

        Raises:
            StorageConflictError: If the stored score is no longer ``expected``
        """
        pass
