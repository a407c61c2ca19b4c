"""Match domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from pickme.domain.error import (
    DuplicateProposalError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    SelfMatchError,
)
from pickme.domain.model import Match
from pickme.domain.repository import MatchRepository, TransactionRunner
from pickme.domain.repository.constraint import MATCH_REQUEST_PICKER_UNIQUE, violates
from pickme.domain.value import (
    MatchId,
    MatchStatus,
    ParticipantRole,
    PickRequestId,
    PickStatus,
    UserId,
)

from .base import Service
from .meetup_service import MeetupService
from .pick_request_service import PickRequestService
from .user_service import UserService


class MatchService(Service):
    """Domain service for match proposals and the requester's answer."""

    def __init__(
        self,
        match_repository: MatchRepository,
        pick_request_service: PickRequestService,
        meetup_service: MeetupService,
        user_service: UserService,
        transactions: TransactionRunner,
    ) -> None:
        """Initialize match service.

        Args:
            match_repository: Match repository
            pick_request_service: Pick request domain service
            meetup_service: Meetup domain service
            user_service: User domain service
            transactions: Unit-of-work runner
        """
        self.match_repository = match_repository
        self.pick_request_service = pick_request_service
        self.meetup_service = meetup_service
        self.user_service = user_service
        self.transactions = transactions

    async def propose(self, pick_request_id: PickRequestId, picker_id: UserId) -> Match:
        """Propose to join someone else's pick request.

        Creates a PENDING match and moves the pick request to MATCHED in one
        transaction.

        Args:
            pick_request_id: Pick request to join
            picker_id: Proposing user

        Returns:
            Created match

        Raises:
            NotFoundError: If the pick request or the picker does not exist
            InvalidStateError: If the pick request is not ACTIVE
            SelfMatchError: If the picker owns the pick request
            DuplicateProposalError: If the picker already proposed on it
        """
        with logfire.span(
            "match_service.propose",
            pick_request_id=str(pick_request_id),
            picker_id=str(picker_id),
        ):

            async def work() -> Match:
                await self.user_service.get_by_id(picker_id)
                pick_request = await self.pick_request_service.get(pick_request_id)
                if pick_request.status != PickStatus.ACTIVE:
                    raise InvalidStateError(
                        "PickRequest",
                        str(pick_request_id),
                        pick_request.status.value,
                        "propose on",
                    )
                if pick_request.owner_id == picker_id:
                    logfire.warn(
                        "Self match attempt",
                        pick_request_id=str(pick_request_id),
                        picker_id=str(picker_id),
                    )
                    raise SelfMatchError(str(pick_request_id))

                existing = await self.match_repository.find_by_request_and_picker(
                    pick_request_id, picker_id
                )
                if existing:
                    raise DuplicateProposalError(str(pick_request_id), str(picker_id))

                match = Match(
                    id=MatchId(uuid4()),
                    pick_request_id=pick_request_id,
                    picker_id=picker_id,
                    requester_id=pick_request.owner_id,
                    status=MatchStatus.PENDING,
                    created_at=datetime.now(timezone.utc),
                )
                try:
                    saved = await self.match_repository.save(match)
                except IntegrityError as e:
                    if not violates(e, MATCH_REQUEST_PICKER_UNIQUE):
                        raise
                    logfire.warn(
                        "Duplicate proposal attempt",
                        pick_request_id=str(pick_request_id),
                        picker_id=str(picker_id),
                    )
                    raise DuplicateProposalError(
                        str(pick_request_id), str(picker_id)
                    ) from e

                await self.pick_request_service.mark_matched(pick_request_id)
                return saved

            match = await self.transactions.run(work)
            logfire.info(
                "Match proposed",
                match_id=str(match.id),
                pick_request_id=str(pick_request_id),
                picker_id=str(picker_id),
            )
            return match

    async def respond(self, match_id: MatchId, approve: bool, caller_id: UserId) -> Match:
        """Requester approves or declines a pending match.

        Approving stamps ``approved_at`` and creates the meetup. Declining
        puts the pick request back on the map. Either way it is one
        transaction.

        Args:
            match_id: Match ID
            approve: True to accept, False to decline
            caller_id: Must be the requester

        Returns:
            The updated match

        Raises:
            NotFoundError: If the match does not exist
            ForbiddenError: If the caller is not the requester
            InvalidStateError: If the match is not PENDING
        """
        with logfire.span(
            "match_service.respond",
            match_id=str(match_id),
            approve=approve,
            caller_id=str(caller_id),
        ):

            async def work() -> Match:
                match = await self.get(match_id)
                if match.role_of(caller_id) is not ParticipantRole.REQUESTER:
                    raise ForbiddenError(
                        "Match", str(match_id), str(caller_id), "respond to"
                    )

                if approve:
                    updated = await self.match_repository.update(
                        match.accept(datetime.now(timezone.utc))
                    )
                    await self.meetup_service.create_for_match(updated)
                else:
                    updated = await self.match_repository.update(match.decline())
                    await self.pick_request_service.revert_to_active(
                        match.pick_request_id
                    )
                return updated

            match = await self.transactions.run(work)
            logfire.info(
                "Match answered", match_id=str(match_id), status=match.status.value
            )
            return match

    async def get(self, match_id: MatchId) -> Match:
        """Get match by ID.

        Raises:
            NotFoundError: If the match does not exist
        """
        match = await self.match_repository.find_by_id(match_id)
        if not match:
            logfire.warn("Match not found", match_id=str(match_id))
            raise NotFoundError("Match", str(match_id))
        return match

    async def list_for_user(self, user_id: UserId) -> list[Match]:
        """List matches where the user is picker or requester, newest first."""
        with logfire.span("match_service.list_for_user", user_id=str(user_id)):
            return await self.match_repository.find_by_user(user_id)
