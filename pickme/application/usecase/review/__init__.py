"""Review use cases."""

from .get_average_rating import (
    GetAverageRatingRequest,
    GetAverageRatingResponse,
    GetAverageRatingUseCase,
)
from .submit_review import SubmitReviewRequest, SubmitReviewResponse, SubmitReviewUseCase

__all__ = [
    "GetAverageRatingRequest",
    "GetAverageRatingResponse",
    "GetAverageRatingUseCase",
    "SubmitReviewRequest",
    "SubmitReviewResponse",
    "SubmitReviewUseCase",
]
