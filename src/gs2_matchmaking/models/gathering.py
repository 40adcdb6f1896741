"""Response models for gathering (player-facing) endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class Gathering(BaseModel):
    """A gathering players join until it fills up or is closed.

    ``meta`` is only set by Room matchmaking and ``passcode`` only by
    Passcode matchmaking.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    gathering_id: str = Field(alias="gatheringId")
    join_player: int | None = Field(default=None, alias="joinPlayer")
    meta: str | None = None
    passcode: str | None = None
    update_at: int | None = Field(default=None, alias="updateAt")


class GatheringResponse(BaseModel):
    """Response carrying the gathering that was created or joined."""

    model_config = ConfigDict(populate_by_name=True)

    item: Gathering


class CustomAutoMatchmakingResponse(BaseModel):
    """Response from POST /matchmaking/{matchmakingName}/customauto.

    When ``done`` is False the server ran out of time before searching every
    gathering; call again with ``search_context`` to resume.
    """

    model_config = ConfigDict(populate_by_name=True)

    done: bool = True
    item: Gathering | None = None
    search_context: str | None = Field(default=None, alias="searchContext")


class DescribeGatheringResponse(BaseModel):
    """Response from GET /matchmaking/{matchmakingName}/room/."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[Gathering] = Field(default_factory=list)
    next_page_token: str | None = Field(default=None, alias="nextPageToken")


class JoinedUsersResponse(BaseModel):
    """User IDs currently in a gathering."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[str] = Field(default_factory=list)
