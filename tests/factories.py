"""Builders shared across the test suite."""

from datetime import datetime, timezone
from uuid import uuid4

from pickme.config import AuthSettings
from pickme.domain.model import Match, Meetup, PickRequest, User
from pickme.domain.repository import UserRepository
from pickme.domain.service import MatchService, MeetupService, PickRequestService
from pickme.domain.value import ActivityType, UserId
from pickme.util.jwt import create_token

# Fixed instant so expiry arithmetic is deterministic
NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


def make_user(name: str = "Alice", **overrides) -> User:
    """Build a user with sensible defaults."""
    fields = {
        "id": UserId(uuid4()),
        "email": f"{name.lower()}-{uuid4().hex[:8]}@example.com",
        "name": name,
        "age": 29,
        "bio": f"Hi, I'm {name}",
        "interests": ["coffee", "hiking"],
    }
    fields.update(overrides)
    return User(**fields)


def auth_cookie(user: User) -> dict[str, str]:
    """Session cookie for ``user`` signed with the default test secret."""
    return {"auth_token": create_token(str(user.id), AuthSettings())}


async def seed_user(env, name: str = "Alice", **overrides) -> User:
    """Store a fresh user through the container's user repository."""
    user_repo = await env.get(UserRepository)
    return await user_repo.save(make_user(name, **overrides))


async def pin_pick_request(env, owner: User, **overrides) -> PickRequest:
    """Create an ACTIVE pick request for ``owner`` through the service."""
    pick_request_service = await env.get(PickRequestService)
    fields = {
        "activity_type": ActivityType.COFFEE,
        "subject": "Flat white and a chat",
        "duration_minutes": 30,
        "latitude": 52.5200,
        "longitude": 13.4050,
    }
    fields.update(overrides)
    return await pick_request_service.create(owner_id=owner.id, **fields)


async def accepted_meetup(env) -> tuple[User, User, PickRequest, Match, Meetup]:
    """Requester pins, picker proposes, requester accepts.

    Returns:
        (requester, picker, pick_request, match, meetup)
    """
    requester = await seed_user(env, "Rita")
    picker = await seed_user(env, "Pete")
    pick_request = await pin_pick_request(env, requester)

    match_service = await env.get(MatchService)
    meetup_service = await env.get(MeetupService)
    match = await match_service.propose(pick_request.id, picker.id)
    match = await match_service.respond(match.id, True, requester.id)
    meetup = await meetup_service.get_by_match(match.id, requester.id)
    return requester, picker, pick_request, match, meetup


async def completed_meetup(env) -> tuple[User, User, PickRequest, Match, Meetup]:
    """Run an accepted meetup through both starts and both ends."""
    requester, picker, pick_request, match, meetup = await accepted_meetup(env)

    meetup_service = await env.get(MeetupService)
    await meetup_service.confirm_start(meetup.id, picker.id)
    await meetup_service.confirm_start(meetup.id, requester.id)
    await meetup_service.confirm_end(meetup.id, picker.id)
    meetup = await meetup_service.confirm_end(meetup.id, requester.id)
    return requester, picker, pick_request, match, meetup
