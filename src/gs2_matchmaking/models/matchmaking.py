"""Response models for matchmaking definition endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class Matchmaking(BaseModel):
    """A matchmaking definition: mode, capacity and completion callback."""

    model_config = ConfigDict(populate_by_name=True)

    matchmaking_id: str = Field(alias="matchmakingId")
    owner_id: str | None = Field(default=None, alias="ownerId")
    name: str
    description: str | None = None
    type: str | None = None
    max_player: int | None = Field(default=None, alias="maxPlayer")
    service_class: str | None = Field(default=None, alias="serviceClass")
    callback: str | None = None
    create_at: int | None = Field(default=None, alias="createAt")
    update_at: int | None = Field(default=None, alias="updateAt")


class DescribeMatchmakingResponse(BaseModel):
    """Response from GET /matchmaking."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[Matchmaking] = Field(default_factory=list)
    next_page_token: str | None = Field(default=None, alias="nextPageToken")


class MatchmakingResponse(BaseModel):
    """Response carrying a single matchmaking definition."""

    model_config = ConfigDict(populate_by_name=True)

    item: Matchmaking


class MatchmakingStatusResponse(BaseModel):
    """Response from GET /matchmaking/{matchmakingName}/status."""

    model_config = ConfigDict(populate_by_name=True)

    status: str


class DescribeServiceClassResponse(BaseModel):
    """Response from GET /matchmaking/serviceClass."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[str] = Field(default_factory=list)
