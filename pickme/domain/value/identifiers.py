"""Strongly typed identifiers for PickMe domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
PickRequestId = NewType("PickRequestId", UUID)
MatchId = NewType("MatchId", UUID)
MeetupId = NewType("MeetupId", UUID)
ReviewId = NewType("ReviewId", UUID)
