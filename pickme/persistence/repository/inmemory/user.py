"""In-memory user repository for testing."""

from typing import Optional, Sequence

from pickme.domain.error import StorageConflictError
from pickme.domain.model.user import User
from pickme.domain.repository.user import UserRepository
from pickme.domain.value import UserId

from .base import InMemoryStore


class InMemoryUserRepository(InMemoryStore, UserRepository):
    """In-memory implementation of UserRepository for testing."""

    _state_attrs = ("_users",)

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Batch-load users by ID."""
        return {uid: self._users[uid] for uid in user_ids if uid in self._users}

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def increment_completed_meetups(self, user_id: UserId) -> None:
        """Atomically increment the completed meetup counter by 1."""
        user = self._users.get(user_id)
        if user:
            self._users[user_id] = user.model_copy(
                update={"completed_meetups": user.completed_meetups + 1}
            )

    async def update_safety_score(
        self, user_id: UserId, expected: int, new_score: int
    ) -> None:
        """Compare-and-set the safety score."""
        user = self._users.get(user_id)
        if user is None or user.safety_score != expected:
            raise StorageConflictError(
                f"Safety score of user {user_id} changed concurrently"
            )
        self._users[user_id] = user.model_copy(update={"safety_score": new_score})
