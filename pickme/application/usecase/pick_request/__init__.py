"""Pick request use cases."""

from .cancel_pick_request import (
    CancelPickRequestRequest,
    CancelPickRequestResponse,
    CancelPickRequestUseCase,
)
from .common import PickRequestSummary
from .create_pick_request import (
    CreatePickRequestRequest,
    CreatePickRequestResponse,
    CreatePickRequestUseCase,
)
from .find_nearby import (
    FindNearbyRequest,
    FindNearbyResponse,
    FindNearbyUseCase,
    NearbyPickRequestItem,
    OwnerProfile,
)
from .list_own_pick_requests import (
    ListOwnPickRequestsRequest,
    ListOwnPickRequestsResponse,
    ListOwnPickRequestsUseCase,
)

__all__ = [
    "CancelPickRequestRequest",
    "CancelPickRequestResponse",
    "CancelPickRequestUseCase",
    "CreatePickRequestRequest",
    "CreatePickRequestResponse",
    "CreatePickRequestUseCase",
    "FindNearbyRequest",
    "FindNearbyResponse",
    "FindNearbyUseCase",
    "ListOwnPickRequestsRequest",
    "ListOwnPickRequestsResponse",
    "ListOwnPickRequestsUseCase",
    "NearbyPickRequestItem",
    "OwnerProfile",
    "PickRequestSummary",
]
