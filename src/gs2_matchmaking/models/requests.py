"""Request models for the matchmaking API.

Each model describes the input map accepted by one or more client methods.
Required fields are path parameters or headers and must be present and not
``None``. Body fields are typed ``Any`` and sent exactly as given; absent
body fields are left out of the body.
"""

from typing import Any

from pydantic import Field

from gs2_matchmaking.models.base import Gs2Request

# =============================================================================
# Matchmaking definitions
# =============================================================================


class CreateMatchmakingRequest(Gs2Request):
    """Input for POST /matchmaking."""

    BODY_FIELDS = (
        "name",
        "description",
        "service_class",
        "type",
        "max_player",
        "callback",
    )

    name: Any = None
    description: Any = None
    service_class: Any = Field(default=None, alias="serviceClass")
    type: Any = None
    max_player: Any = Field(default=None, alias="maxPlayer")
    callback: Any = None


class MatchmakingNameRequest(Gs2Request):
    """Input for endpoints addressed by matchmaking name only."""

    matchmaking_name: str = Field(alias="matchmakingName")


class UpdateMatchmakingRequest(MatchmakingNameRequest):
    """Input for PUT /matchmaking/{matchmakingName}."""

    BODY_FIELDS = ("description", "service_class", "callback")

    description: Any = None
    service_class: Any = Field(default=None, alias="serviceClass")
    callback: Any = None


# =============================================================================
# Player-facing matchmaking (access token required)
# =============================================================================


class AccessTokenRequest(MatchmakingNameRequest):
    """Input for player endpoints that need only a matchmaking name."""

    access_token: str = Field(alias="accessToken")


class GatheringRequest(AccessTokenRequest):
    """Input for player endpoints addressing a single gathering."""

    gathering_id: str = Field(alias="gatheringId")


class CustomAutoMatchmakingRequest(AccessTokenRequest):
    """Input for POST /matchmaking/{matchmakingName}/customauto.

    ``attributeN`` are the attributes of a gathering created when no match is
    found; ``searchAttributeNMin``/``Max`` bound the gatherings to join.
    Pass back ``searchContext`` from a previous response, with the same
    search bounds, to resume an unfinished search.
    """

    BODY_FIELDS = (
        "attribute1",
        "attribute2",
        "attribute3",
        "attribute4",
        "attribute5",
        "search_attribute1_min",
        "search_attribute2_min",
        "search_attribute3_min",
        "search_attribute4_min",
        "search_attribute5_min",
        "search_attribute1_max",
        "search_attribute2_max",
        "search_attribute3_max",
        "search_attribute4_max",
        "search_attribute5_max",
        "search_context",
    )

    attribute1: Any = None
    attribute2: Any = None
    attribute3: Any = None
    attribute4: Any = None
    attribute5: Any = None
    search_attribute1_min: Any = Field(default=None, alias="searchAttribute1Min")
    search_attribute2_min: Any = Field(default=None, alias="searchAttribute2Min")
    search_attribute3_min: Any = Field(default=None, alias="searchAttribute3Min")
    search_attribute4_min: Any = Field(default=None, alias="searchAttribute4Min")
    search_attribute5_min: Any = Field(default=None, alias="searchAttribute5Min")
    search_attribute1_max: Any = Field(default=None, alias="searchAttribute1Max")
    search_attribute2_max: Any = Field(default=None, alias="searchAttribute2Max")
    search_attribute3_max: Any = Field(default=None, alias="searchAttribute3Max")
    search_attribute4_max: Any = Field(default=None, alias="searchAttribute4Max")
    search_attribute5_max: Any = Field(default=None, alias="searchAttribute5Max")
    search_context: Any = Field(default=None, alias="searchContext")


class PasscodeJoinRequest(AccessTokenRequest):
    """Input for POST /matchmaking/{matchmakingName}/passcode/join/{passcode}."""

    passcode: str


class RoomCreateGatheringRequest(AccessTokenRequest):
    """Input for POST /matchmaking/{matchmakingName}/room."""

    BODY_FIELDS = ("meta",)

    # Up to 128 bytes; shown to other players when listing rooms
    meta: Any = None
