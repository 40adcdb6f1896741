"""Async client for the GS2 Matchmaking REST API.

Each public method maps one-to-one to a remote endpoint. Methods that take a
``request`` accept a mapping (keys in wire form such as ``matchmakingName``
or Python form such as ``matchmaking_name``) or the matching request model.
Required parameters are checked locally before anything is sent; every other
failure comes from the server as a ``Gs2APIError``.

Matchmaking modes:
    Anybody     join any gathering waiting for players, or create one.
    CustomAuto  join a gathering whose attributes fall in the given ranges.
    Passcode    create a gathering with an 8-digit passcode, or join by code.
    Room        list gatherings and join the one the player picks.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from gs2_matchmaking.client.exceptions import Gs2ClientError, MissingParameterError
from gs2_matchmaking.client.http_client import Gs2HTTPClient
from gs2_matchmaking.models import (
    AccessTokenRequest,
    CreateMatchmakingRequest,
    CustomAutoMatchmakingRequest,
    CustomAutoMatchmakingResponse,
    DescribeGatheringResponse,
    DescribeMatchmakingResponse,
    DescribeServiceClassResponse,
    Gathering,
    GatheringRequest,
    GatheringResponse,
    Gs2Request,
    JoinedUsersResponse,
    Matchmaking,
    MatchmakingNameRequest,
    MatchmakingResponse,
    MatchmakingStatusResponse,
    PasscodeJoinRequest,
    RoomCreateGatheringRequest,
    UpdateMatchmakingRequest,
)

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Gs2Request)

RequestInput = Mapping[str, Any] | BaseModel | None

ACCESS_TOKEN_HEADER = "X-GS2-ACCESS-TOKEN"


def _validate_request(action: str, request: RequestInput, model: type[R]) -> R:
    """Turn a request input map into `model`, checking required parameters.

    Raises:
        MissingParameterError: If `request` is None or a required key is
            missing or None.
        Gs2ClientError: If a value has the wrong type.
    """
    if request is None:
        raise MissingParameterError(action, [])
    if isinstance(request, model):
        return request
    if isinstance(request, BaseModel):
        request = request.model_dump(by_alias=True, exclude_unset=True)
    elif isinstance(request, Mapping):
        request = dict(request)

    try:
        return model.model_validate(request)
    except ValidationError as e:
        missing = [
            str(error["loc"][0])
            for error in e.errors()
            if error["loc"]
            and (error["type"] == "missing" or error.get("input", "") is None)
        ]
        if missing:
            raise MissingParameterError(action, missing) from e
        raise Gs2ClientError(f"{action}: invalid request: {e}") from e


def _page_query(page_token: str | None, limit: int | None) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if page_token:
        query["pageToken"] = page_token
    if limit:
        query["limit"] = limit
    return query


def _token_header(request: AccessTokenRequest) -> dict[str, str]:
    return {ACCESS_TOKEN_HEADER: request.access_token}


class Gs2MatchmakingClient(Gs2HTTPClient):
    """GS2-Matchmaking client.

    Example:
        config = ClientConfig.from_yaml("gs2.yaml")
        async with Gs2MatchmakingClient.from_config(config) as client:
            result = await client.room_create_gathering({
                "matchmakingName": "ranked",
                "accessToken": token,
                "meta": "mode=duel",
            })
            print(result.item.gathering_id)
    """

    ENDPOINT = "matchmaking"
    SERVICE = "Gs2Matchmaking"

    # =========================================================================
    # Matchmaking definitions
    # =========================================================================

    async def describe_matchmaking(
        self,
        page_token: str | None = None,
        limit: int | None = None,
    ) -> DescribeMatchmakingResponse:
        """Get one page of matchmaking definitions.

        Args:
            page_token: Token from a previous page's ``next_page_token``.
            limit: Maximum number of items to return.
        """
        data = await self.do_get(
            self.SERVICE,
            "DescribeMatchmaking",
            self.ENDPOINT,
            "/matchmaking",
            _page_query(page_token, limit),
        )
        return self.parse_response(
            "DescribeMatchmaking", data or {}, DescribeMatchmakingResponse
        )

    async def iter_matchmaking(
        self, limit: int | None = None
    ) -> AsyncIterator[Matchmaking]:
        """Iterate over every matchmaking definition, page by page."""
        page_token: str | None = None
        while True:
            page = await self.describe_matchmaking(page_token, limit)
            for item in page.items:
                yield item
            if not page.next_page_token:
                return
            page_token = page.next_page_token

    async def describe_service_class(self) -> list[str]:
        """Get the list of available service classes."""
        data = await self.do_get(
            self.SERVICE,
            "DescribeServiceClass",
            self.ENDPOINT,
            "/matchmaking/serviceClass",
            {},
        )
        response = self.parse_response(
            "DescribeServiceClass", data or {}, DescribeServiceClassResponse
        )
        return response.items

    async def create_matchmaking(self, request: RequestInput) -> MatchmakingResponse:
        """Create a matchmaking definition.

        This is the first resource to create before using GS2-Matchmaking;
        it fixes the matchmaking mode (``type``) and ``maxPlayer``.

        Args:
            request: name, description, serviceClass, type, maxPlayer, callback.
        """
        req = _validate_request("CreateMatchmaking", request, CreateMatchmakingRequest)
        data = await self.do_post(
            self.SERVICE,
            "CreateMatchmaking",
            self.ENDPOINT,
            "/matchmaking",
            req.to_body(),
            {},
        )
        return self.parse_response("CreateMatchmaking", data, MatchmakingResponse)

    async def get_matchmaking(self, request: RequestInput) -> MatchmakingResponse:
        """Get a matchmaking definition by ``matchmakingName``."""
        req = _validate_request("GetMatchmaking", request, MatchmakingNameRequest)
        data = await self.do_get(
            self.SERVICE,
            "GetMatchmaking",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}",
            {},
        )
        return self.parse_response("GetMatchmaking", data, MatchmakingResponse)

    async def get_matchmaking_status(
        self, request: RequestInput
    ) -> MatchmakingStatusResponse:
        """Get the provisioning status of a matchmaking definition."""
        req = _validate_request("GetMatchmakingStatus", request, MatchmakingNameRequest)
        data = await self.do_get(
            self.SERVICE,
            "GetMatchmakingStatus",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/status",
            {},
        )
        return self.parse_response(
            "GetMatchmakingStatus", data, MatchmakingStatusResponse
        )

    async def update_matchmaking(self, request: RequestInput) -> MatchmakingResponse:
        """Update a matchmaking definition.

        Args:
            request: matchmakingName (required), description, serviceClass,
                callback.
        """
        req = _validate_request("UpdateMatchmaking", request, UpdateMatchmakingRequest)
        data = await self.do_put(
            self.SERVICE,
            "UpdateMatchmaking",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}",
            req.to_body(),
            {},
        )
        return self.parse_response("UpdateMatchmaking", data, MatchmakingResponse)

    async def delete_matchmaking(self, request: RequestInput) -> None:
        """Delete a matchmaking definition."""
        req = _validate_request("DeleteMatchmaking", request, MatchmakingNameRequest)
        await self.do_delete(
            self.SERVICE,
            "DeleteMatchmaking",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}",
            {},
        )

    # =========================================================================
    # Anybody matchmaking
    # =========================================================================

    async def anybody_do_matchmaking(self, request: RequestInput) -> GatheringResponse:
        """Join a gathering waiting for players, creating one if none exists.

        The returned ``join_player`` tells whether this player created the
        gathering. Wait for the completion callback, or poll
        :meth:`anybody_describe_joined_user` to watch progress.

        Args:
            request: matchmakingName, accessToken.
        """
        req = _validate_request("DoMatchmaking", request, AccessTokenRequest)
        data = await self.do_post(
            self.SERVICE,
            "DoMatchmaking",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/anybody",
            {},
            {},
            _token_header(req),
        )
        return self.parse_response("DoMatchmaking", data, GatheringResponse)

    async def anybody_describe_joined_user(
        self, request: RequestInput
    ) -> JoinedUsersResponse:
        """List the user IDs in an Anybody gathering."""
        return await self._describe_joined_user("anybody", request)

    async def anybody_leave_gathering(self, request: RequestInput) -> None:
        """Leave an Anybody gathering.

        There is no host: matchmaking continues for the others even when the
        player who created the gathering leaves.
        """
        await self._leave_gathering("anybody", request)

    # =========================================================================
    # CustomAuto matchmaking
    # =========================================================================

    async def custom_auto_do_matchmaking(
        self, request: RequestInput
    ) -> CustomAutoMatchmakingResponse:
        """Join a gathering whose attributes fall within the search ranges.

        Up to five attributes can be searched, each with a min and max. When
        the server cannot search every gathering in time it returns
        ``done=False`` and a ``search_context``; call again with the same
        ranges and that context to resume. When no gathering matches, a new
        one is created with ``attribute1``..``attribute5``.

        Args:
            request: matchmakingName, accessToken, attribute1-5,
                searchAttribute1-5Min, searchAttribute1-5Max, searchContext.
        """
        req = _validate_request(
            "DoMatchmaking", request, CustomAutoMatchmakingRequest
        )
        data = await self.do_post(
            self.SERVICE,
            "DoMatchmaking",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/customauto",
            req.to_body(),
            {},
            _token_header(req),
        )
        return self.parse_response(
            "DoMatchmaking", data, CustomAutoMatchmakingResponse
        )

    async def custom_auto_describe_joined_user(
        self, request: RequestInput
    ) -> JoinedUsersResponse:
        """List the user IDs in a CustomAuto gathering."""
        return await self._describe_joined_user("customauto", request)

    async def custom_auto_leave_gathering(self, request: RequestInput) -> None:
        """Leave a CustomAuto gathering."""
        await self._leave_gathering("customauto", request)

    # =========================================================================
    # Passcode matchmaking
    # =========================================================================

    async def passcode_create_gathering(
        self, request: RequestInput
    ) -> GatheringResponse:
        """Create a gathering with a freshly assigned 8-digit passcode.

        The passcode is returned in ``item.passcode``. Its upper digits are
        random and its lower digits a millisecond timestamp, so gatherings
        created in the same millisecond may collide.

        Args:
            request: matchmakingName, accessToken.
        """
        req = _validate_request("CreateGathering", request, AccessTokenRequest)
        data = await self.do_post(
            self.SERVICE,
            "CreateGathering",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/passcode",
            {},
            {},
            _token_header(req),
        )
        return self.parse_response("CreateGathering", data, GatheringResponse)

    async def passcode_join_gathering(self, request: RequestInput) -> GatheringResponse:
        """Join the gathering identified by ``passcode``.

        Args:
            request: matchmakingName, passcode, accessToken.
        """
        req = _validate_request("JoinGathering", request, PasscodeJoinRequest)
        data = await self.do_post(
            self.SERVICE,
            "JoinGathering",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/passcode/join/{req.passcode}",
            {},
            {},
            _token_header(req),
        )
        return self.parse_response("JoinGathering", data, GatheringResponse)

    async def passcode_describe_joined_user(
        self, request: RequestInput
    ) -> JoinedUsersResponse:
        """List the user IDs in a Passcode gathering."""
        return await self._describe_joined_user("passcode", request)

    async def passcode_leave_gathering(self, request: RequestInput) -> None:
        """Leave a Passcode gathering."""
        await self._leave_gathering("passcode", request)

    async def passcode_breakup_gathering(self, request: RequestInput) -> None:
        """Break up a Passcode gathering (creator only, no completion callback)."""
        await self._breakup_gathering("passcode", request)

    async def passcode_early_complete_gathering(self, request: RequestInput) -> None:
        """Complete a Passcode gathering before it is full (creator only)."""
        await self._early_complete_gathering("passcode", request)

    # =========================================================================
    # Room matchmaking
    # =========================================================================

    async def room_create_gathering(self, request: RequestInput) -> GatheringResponse:
        """Create a Room gathering.

        Room matchmaking is create, then list (:meth:`room_describe_gathering`),
        then join (:meth:`room_join_gathering`). ``meta`` (128 bytes max) is
        shown to players browsing the list, e.g. the desired game mode.

        Args:
            request: matchmakingName, accessToken, meta (optional).
        """
        req = _validate_request("CreateGathering", request, RoomCreateGatheringRequest)
        data = await self.do_post(
            self.SERVICE,
            "CreateGathering",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/room",
            req.to_body(),
            {},
            _token_header(req),
        )
        return self.parse_response("CreateGathering", data, GatheringResponse)

    async def room_join_gathering(self, request: RequestInput) -> GatheringResponse:
        """Join a Room gathering picked from the list.

        Listing and joining are not atomic: the gathering may be full or
        broken up by now, in which case the server answers with an error
        (raised as a ``Gs2APIError`` subclass).

        Args:
            request: matchmakingName, gatheringId, accessToken.
        """
        req = _validate_request("JoinGathering", request, GatheringRequest)
        data = await self.do_post(
            self.SERVICE,
            "JoinGathering",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/room/{req.gathering_id}",
            {},
            {},
            _token_header(req),
        )
        return self.parse_response("JoinGathering", data, GatheringResponse)

    async def room_describe_gathering(
        self,
        request: RequestInput,
        page_token: str | None = None,
        limit: int | None = None,
    ) -> DescribeGatheringResponse:
        """Get one page of Room gatherings waiting for players.

        Args:
            request: matchmakingName, accessToken.
            page_token: Token from a previous page's ``next_page_token``.
            limit: Maximum number of items to return.
        """
        req = _validate_request("DescribeGathering", request, AccessTokenRequest)
        data = await self.do_get(
            self.SERVICE,
            "DescribeGathering",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/room/",
            _page_query(page_token, limit),
            _token_header(req),
        )
        return self.parse_response(
            "DescribeGathering", data or {}, DescribeGatheringResponse
        )

    async def iter_room_gatherings(
        self, request: RequestInput, limit: int | None = None
    ) -> AsyncIterator[Gathering]:
        """Iterate over every Room gathering, page by page."""
        req = _validate_request("DescribeGathering", request, AccessTokenRequest)
        page_token: str | None = None
        while True:
            page = await self.room_describe_gathering(req, page_token, limit)
            for item in page.items:
                yield item
            if not page.next_page_token:
                return
            page_token = page.next_page_token

    async def room_describe_joined_user(
        self, request: RequestInput
    ) -> JoinedUsersResponse:
        """List the user IDs in a Room gathering."""
        return await self._describe_joined_user("room", request)

    async def room_leave_gathering(self, request: RequestInput) -> None:
        """Leave a Room gathering."""
        await self._leave_gathering("room", request)

    async def room_breakup_gathering(self, request: RequestInput) -> None:
        """Break up a Room gathering (creator only, no completion callback)."""
        await self._breakup_gathering("room", request)

    async def room_early_complete_gathering(self, request: RequestInput) -> None:
        """Complete a Room gathering before it is full (creator only)."""
        await self._early_complete_gathering("room", request)

    # =========================================================================
    # Gathering operations shared by the matchmaking modes
    # =========================================================================

    async def _describe_joined_user(
        self, mode: str, request: RequestInput
    ) -> JoinedUsersResponse:
        req = _validate_request("DescribeJoinedUser", request, GatheringRequest)
        data = await self.do_get(
            self.SERVICE,
            "DescribeJoinedUser",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/{mode}/{req.gathering_id}/player",
            {},
            _token_header(req),
        )
        return self.parse_response(
            "DescribeJoinedUser", data or {}, JoinedUsersResponse
        )

    async def _leave_gathering(self, mode: str, request: RequestInput) -> None:
        req = _validate_request("LeaveGathering", request, GatheringRequest)
        await self.do_delete(
            self.SERVICE,
            "LeaveGathering",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/{mode}/{req.gathering_id}/player",
            {},
            _token_header(req),
        )
        logger.debug("Left %s gathering %s", mode, req.gathering_id)

    async def _breakup_gathering(self, mode: str, request: RequestInput) -> None:
        req = _validate_request("BreakupGathering", request, GatheringRequest)
        await self.do_delete(
            self.SERVICE,
            "BreakupGathering",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/{mode}/{req.gathering_id}",
            {},
            _token_header(req),
        )
        logger.debug("Broke up %s gathering %s", mode, req.gathering_id)

    async def _early_complete_gathering(self, mode: str, request: RequestInput) -> None:
        req = _validate_request("EarlyCompleteGathering", request, GatheringRequest)
        await self.do_post(
            self.SERVICE,
            "EarlyCompleteGathering",
            self.ENDPOINT,
            f"/matchmaking/{req.matchmaking_name}/{mode}/{req.gathering_id}/complete",
            {},
            {},
            _token_header(req),
        )
