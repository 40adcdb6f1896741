"""HTTP client module for GS2 Matchmaking.

Usage:
    from gs2_matchmaking.client import Gs2MatchmakingClient, Gs2APIError

    async with Gs2MatchmakingClient("ap-northeast-1", credentials) as client:
        page = await client.describe_matchmaking()
"""

from gs2_matchmaking.client.exceptions import (
    BadGatewayError,
    BadRequestError,
    ConflictError,
    Gs2APIError,
    Gs2ClientError,
    Gs2ConnectionError,
    InternalServerError,
    MissingParameterError,
    NotFoundError,
    QuotaExceededError,
    RequestTimeoutError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from gs2_matchmaking.client.http_client import Gs2HTTPClient
from gs2_matchmaking.client.matchmaking_client import Gs2MatchmakingClient

__all__ = [
    "Gs2HTTPClient",
    "Gs2MatchmakingClient",
    # Errors
    "Gs2ClientError",
    "MissingParameterError",
    "Gs2ConnectionError",
    "Gs2APIError",
    "BadRequestError",
    "UnauthorizedError",
    "QuotaExceededError",
    "NotFoundError",
    "ConflictError",
    "InternalServerError",
    "BadGatewayError",
    "ServiceUnavailableError",
    "RequestTimeoutError",
]
