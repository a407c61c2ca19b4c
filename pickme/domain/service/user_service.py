"""User domain service."""

import logfire

from pickme.domain.error import NotFoundError
from pickme.domain.model import User
from pickme.domain.repository import UserRepository
from pickme.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user profile reads and reputation counters."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def increment_completed_meetups(self, user_id: UserId) -> None:
        """Atomically bump the user's completed meetup counter.

        Called once per participant when a meetup is confirmed ended.

        Args:
            user_id: User ID
        """
        with logfire.span(
            "user_service.increment_completed_meetups", user_id=str(user_id)
        ):
            await self.user_repository.increment_completed_meetups(user_id)
            logfire.info("Completed meetups incremented", user_id=str(user_id))
