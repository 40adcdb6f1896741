"""Pydantic models for the GS2 Matchmaking client.

Usage:
    from gs2_matchmaking.models import Credentials, Matchmaking, Gathering
    from gs2_matchmaking.models import GatheringRequest, RoomCreateGatheringRequest
"""

from gs2_matchmaking.models.base import Credentials, Gs2Request
from gs2_matchmaking.models.gathering import (
    CustomAutoMatchmakingResponse,
    DescribeGatheringResponse,
    Gathering,
    GatheringResponse,
    JoinedUsersResponse,
)
from gs2_matchmaking.models.matchmaking import (
    DescribeMatchmakingResponse,
    DescribeServiceClassResponse,
    Matchmaking,
    MatchmakingResponse,
    MatchmakingStatusResponse,
)
from gs2_matchmaking.models.requests import (
    AccessTokenRequest,
    CreateMatchmakingRequest,
    CustomAutoMatchmakingRequest,
    GatheringRequest,
    MatchmakingNameRequest,
    PasscodeJoinRequest,
    RoomCreateGatheringRequest,
    UpdateMatchmakingRequest,
)

__all__ = [
    # Base
    "Credentials",
    "Gs2Request",
    # Requests
    "CreateMatchmakingRequest",
    "MatchmakingNameRequest",
    "UpdateMatchmakingRequest",
    "AccessTokenRequest",
    "GatheringRequest",
    "CustomAutoMatchmakingRequest",
    "PasscodeJoinRequest",
    "RoomCreateGatheringRequest",
    # Matchmaking
    "Matchmaking",
    "DescribeMatchmakingResponse",
    "MatchmakingResponse",
    "MatchmakingStatusResponse",
    "DescribeServiceClassResponse",
    # Gathering
    "Gathering",
    "GatheringResponse",
    "CustomAutoMatchmakingResponse",
    "DescribeGatheringResponse",
    "JoinedUsersResponse",
]
