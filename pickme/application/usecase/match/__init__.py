"""Match use cases."""

from .common import MatchSummary
from .list_matches import ListMatchesRequest, ListMatchesResponse, ListMatchesUseCase
from .propose_match import ProposeMatchRequest, ProposeMatchResponse, ProposeMatchUseCase
from .respond_to_match import (
    RespondToMatchRequest,
    RespondToMatchResponse,
    RespondToMatchUseCase,
)

__all__ = [
    "ListMatchesRequest",
    "ListMatchesResponse",
    "ListMatchesUseCase",
    "MatchSummary",
    "ProposeMatchRequest",
    "ProposeMatchResponse",
    "ProposeMatchUseCase",
    "RespondToMatchRequest",
    "RespondToMatchResponse",
    "RespondToMatchUseCase",
]
