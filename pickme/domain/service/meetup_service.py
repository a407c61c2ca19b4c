"""Meetup domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from pickme.domain.error import ForbiddenError, NotFoundError
from pickme.domain.model import Match, Meetup
from pickme.domain.repository import (
    MatchRepository,
    MeetupRepository,
    TransactionRunner,
)
from pickme.domain.value import (
    MatchId,
    MeetupId,
    MeetupStatus,
    ParticipantRole,
    UserId,
)

from .base import Service
from .pick_request_service import PickRequestService
from .user_service import UserService


class MeetupService(Service):
    """Domain service for the meetup lifecycle.

    Start and end both need a confirmation from each participant. The
    second end confirmation closes the whole chain in one transaction: the
    meetup, its match, the pick request and both users' counters.
    """

    def __init__(
        self,
        meetup_repository: MeetupRepository,
        match_repository: MatchRepository,
        pick_request_service: PickRequestService,
        user_service: UserService,
        transactions: TransactionRunner,
    ) -> None:
        """Initialize meetup service.

        Args:
            meetup_repository: Meetup repository
            match_repository: Match repository
            pick_request_service: Pick request domain service
            user_service: User domain service
            transactions: Unit-of-work runner
        """
        self.meetup_repository = meetup_repository
        self.match_repository = match_repository
        self.pick_request_service = pick_request_service
        self.user_service = user_service
        self.transactions = transactions

    async def create_for_match(self, match: Match) -> Meetup:
        """Create the NOT_STARTED meetup for an accepted match.

        Runs inside the caller's transaction.

        Args:
            match: The accepted match

        Returns:
            Created meetup
        """
        meetup = Meetup(
            id=MeetupId(uuid4()),
            match_id=match.id,
            picker_id=match.picker_id,
            requester_id=match.requester_id,
            status=MeetupStatus.NOT_STARTED,
            created_at=datetime.now(timezone.utc),
        )
        saved = await self.meetup_repository.save(meetup)
        logfire.info(
            "Meetup created", meetup_id=str(saved.id), match_id=str(match.id)
        )
        return saved

    async def get(self, meetup_id: MeetupId, caller_id: UserId) -> Meetup:
        """Get a meetup the caller takes part in.

        Raises:
            NotFoundError: If the meetup does not exist
            ForbiddenError: If the caller is not a participant
        """
        with logfire.span(
            "meetup_service.get", meetup_id=str(meetup_id), caller_id=str(caller_id)
        ):
            meetup = await self._load(meetup_id)
            self._require_role(meetup, caller_id, "view")
            return meetup

    async def get_by_match(self, match_id: MatchId, caller_id: UserId) -> Meetup:
        """Get the meetup for a match the caller takes part in.

        Raises:
            NotFoundError: If the match has no meetup
            ForbiddenError: If the caller is not a participant
        """
        with logfire.span(
            "meetup_service.get_by_match",
            match_id=str(match_id),
            caller_id=str(caller_id),
        ):
            meetup = await self.meetup_repository.find_by_match(match_id)
            if not meetup:
                raise NotFoundError("Meetup", f"match={match_id}")
            self._require_role(meetup, caller_id, "view")
            return meetup

    async def confirm_start(self, meetup_id: MeetupId, caller_id: UserId) -> Meetup:
        """Record the caller's start confirmation.

        Args:
            meetup_id: Meetup ID
            caller_id: Picker or requester

        Returns:
            The meetup, IN_PROGRESS once both sides have confirmed

        Raises:
            NotFoundError: If the meetup does not exist
            ForbiddenError: If the caller is not a participant
            InvalidStateError: If the meetup is not NOT_STARTED
        """
        with logfire.span(
            "meetup_service.confirm_start",
            meetup_id=str(meetup_id),
            caller_id=str(caller_id),
        ):

            async def work() -> Meetup:
                meetup = await self._load(meetup_id)
                role = self._require_role(meetup, caller_id, "start")
                updated = meetup.confirm_start(role, datetime.now(timezone.utc))
                if updated is meetup:
                    return meetup
                return await self.meetup_repository.update(updated)

            meetup = await self.transactions.run(work)
            logfire.info(
                "Meetup start confirmed",
                meetup_id=str(meetup_id),
                caller_id=str(caller_id),
                status=meetup.status.value,
            )
            return meetup

    async def confirm_end(self, meetup_id: MeetupId, caller_id: UserId) -> Meetup:
        """Record the caller's end confirmation.

        When the second side confirms, the meetup, its match and its pick
        request become COMPLETED and both users' completed meetup counters
        go up by one.

        Args:
            meetup_id: Meetup ID
            caller_id: Picker or requester

        Returns:
            The meetup, COMPLETED once both sides have confirmed

        Raises:
            NotFoundError: If the meetup does not exist
            ForbiddenError: If the caller is not a participant
            InvalidStateError: If the meetup is not IN_PROGRESS
        """
        with logfire.span(
            "meetup_service.confirm_end",
            meetup_id=str(meetup_id),
            caller_id=str(caller_id),
        ):

            async def work() -> Meetup:
                meetup = await self._load(meetup_id)
                role = self._require_role(meetup, caller_id, "end")
                updated = meetup.confirm_end(role, datetime.now(timezone.utc))
                if updated is meetup:
                    return meetup

                saved = await self.meetup_repository.update(updated)
                if saved.status == MeetupStatus.COMPLETED:
                    await self._complete_chain(saved)
                return saved

            meetup = await self.transactions.run(work)
            logfire.info(
                "Meetup end confirmed",
                meetup_id=str(meetup_id),
                caller_id=str(caller_id),
                status=meetup.status.value,
            )
            return meetup

    async def cancel(self, meetup_id: MeetupId, caller_id: UserId) -> Meetup:
        """Call off a meetup that has not started.

        No counters change. The match stays ACCEPTED and the pick request
        stays MATCHED: a MATCHED request only goes back on the map through a
        decline, and an accepted match has no way back to PENDING. The old
        request is therefore closed for good. It is hidden from proximity
        search and skipped by the expiry sweep, and the requester pins a new
        one to look for company again.

        Raises:
            NotFoundError: If the meetup does not exist
            ForbiddenError: If the caller is not a participant
            InvalidStateError: If the meetup is not NOT_STARTED
        """
        with logfire.span(
            "meetup_service.cancel", meetup_id=str(meetup_id), caller_id=str(caller_id)
        ):

            async def work() -> Meetup:
                meetup = await self._load(meetup_id)
                self._require_role(meetup, caller_id, "cancel")
                return await self.meetup_repository.update(meetup.cancel())

            meetup = await self.transactions.run(work)
            logfire.info(
                "Meetup cancelled", meetup_id=str(meetup_id), caller_id=str(caller_id)
            )
            return meetup

    async def _complete_chain(self, meetup: Meetup) -> None:
        match = await self.match_repository.find_by_id(meetup.match_id)
        if not match:
            raise NotFoundError("Match", str(meetup.match_id))

        await self.match_repository.update(match.complete())
        await self.pick_request_service.mark_completed(match.pick_request_id)
        await self.user_service.increment_completed_meetups(meetup.picker_id)
        await self.user_service.increment_completed_meetups(meetup.requester_id)

        logfire.info(
            "Meetup completed",
            meetup_id=str(meetup.id),
            match_id=str(match.id),
            duration_minutes=meetup.duration_minutes,
        )

    async def _load(self, meetup_id: MeetupId) -> Meetup:
        meetup = await self.meetup_repository.find_by_id(meetup_id)
        if not meetup:
            logfire.warn("Meetup not found", meetup_id=str(meetup_id))
            raise NotFoundError("Meetup", str(meetup_id))
        return meetup

    @staticmethod
    def _require_role(meetup: Meetup, caller_id: UserId, action: str) -> ParticipantRole:
        role = meetup.role_of(caller_id)
        if role is None:
            logfire.warn(
                "Non-participant meetup access",
                meetup_id=str(meetup.id),
                caller_id=str(caller_id),
                action=action,
            )
            raise ForbiddenError("Meetup", str(meetup.id), str(caller_id), action)
        return role
