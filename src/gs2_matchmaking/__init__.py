"""Async Python client for the GS2 Matchmaking REST API."""

from gs2_matchmaking.client import (
    Gs2APIError,
    Gs2ClientError,
    Gs2MatchmakingClient,
    MissingParameterError,
)
from gs2_matchmaking.config import ClientConfig
from gs2_matchmaking.models import Credentials

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "Credentials",
    "Gs2APIError",
    "Gs2ClientError",
    "Gs2MatchmakingClient",
    "MissingParameterError",
]
