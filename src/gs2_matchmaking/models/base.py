"""Base models shared by requests and client configuration."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class Credentials(BaseModel):
    """GS2 project credentials (client ID and secret)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    client_id: str = Field(alias="clientId", min_length=1)
    client_secret: SecretStr = Field(alias="clientSecret")


class Gs2Request(BaseModel):
    """Base model for request input maps.

    Keys may be given in wire form (``matchmakingName``) or Python form
    (``matchmaking_name``). Identifiers typed as numbers are accepted as
    strings, since passcodes and gathering IDs are often handled as ints.

    Subclasses list the fields that travel in the JSON body in
    ``BODY_FIELDS``; everything else is a path parameter or a header.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    BODY_FIELDS: ClassVar[tuple[str, ...]] = ()

    def to_body(self) -> dict[str, Any]:
        """Return the JSON body: body fields that were present in the input."""
        if not self.BODY_FIELDS:
            return {}
        return self.model_dump(
            by_alias=True,
            exclude_unset=True,
            include=set(self.BODY_FIELDS),
        )
