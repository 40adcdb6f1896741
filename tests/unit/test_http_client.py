"""Unit tests for Gs2HTTPClient.

Tests cover:
- Configuration and context manager behavior
- URL and header construction
- Error mapping from HTTP status codes
- Retry logic for idempotent requests
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ConnectError, TimeoutException

from gs2_matchmaking.client import (
    BadRequestError,
    ConflictError,
    Gs2APIError,
    Gs2ClientError,
    Gs2ConnectionError,
    Gs2HTTPClient,
    Gs2MatchmakingClient,
    NotFoundError,
    UnauthorizedError,
)
from gs2_matchmaking.client.http_client import CLIENT_ID_HEADER
from gs2_matchmaking.config import ClientConfig
from gs2_matchmaking.models import Credentials
from tests.conftest import make_response


class TestGs2HTTPClientInit:
    """Tests for Gs2HTTPClient initialization."""

    def test_default_configuration(self, credentials: Credentials) -> None:
        """Test client initializes with default configuration."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        assert client.region == "ap-northeast-1"
        assert client.timeout == 30.0
        assert client.max_retries == 3
        assert client._client is None

    def test_from_config(self, credentials: Credentials) -> None:
        """Test client takes its settings from a ClientConfig."""
        config = ClientConfig(
            region="us-east-1",
            credentials=credentials,
            endpoint_url_template="http://localhost:8080/{service}/",
            timeout=5.0,
            max_retries=1,
        )
        client = Gs2HTTPClient.from_config(config)
        assert client.region == "us-east-1"
        assert client.credentials is credentials
        assert client.timeout == 5.0
        assert client.max_retries == 1
        assert client.endpoint_url("matchmaking") == "http://localhost:8080/matchmaking"

    def test_endpoint_url_uses_region(self, credentials: Credentials) -> None:
        """Test the default endpoint template fills service and region."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        assert (
            client.endpoint_url("matchmaking")
            == "https://matchmaking.ap-northeast-1.gs2io.com"
        )


class TestGs2HTTPClientContextManager:
    """Tests for async context manager behavior."""

    @pytest.mark.asyncio
    async def test_context_manager_connects_and_closes(
        self, credentials: Credentials
    ) -> None:
        """Test context manager properly connects and closes client."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)

        async with client:
            assert client._client is not None

        assert client._client is None

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, credentials: Credentials) -> None:
        """Test calling connect() multiple times is safe."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()
        first_client = client._client

        await client.connect()
        assert client._client is first_client

        await client.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, credentials: Credentials) -> None:
        """Test calling close() multiple times is safe."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()
        await client.close()
        await client.close()
        assert client._client is None

    @pytest.mark.asyncio
    async def test_client_id_header_is_set(self, credentials: Credentials) -> None:
        """Test every request carries the project client ID."""
        async with Gs2HTTPClient("ap-northeast-1", credentials) as client:
            assert client._client.headers[CLIENT_ID_HEADER] == "client-abc"


class TestRequests:
    """Tests for the do_get/do_post/do_put/do_delete helpers."""

    @pytest.mark.asyncio
    async def test_do_get_passes_query_and_headers(
        self, credentials: Credentials
    ) -> None:
        """Test GET forwards query parameters and extra headers."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response({"items": []})

            result = await client.do_get(
                "Gs2Matchmaking",
                "DescribeMatchmaking",
                "matchmaking",
                "/matchmaking",
                {"limit": 10},
                {"X-Test": "1"},
            )

            assert result == {"items": []}
            call_args = mock_request.call_args
            assert call_args[0][0] == "GET"
            assert call_args[0][1] == (
                "https://matchmaking.ap-northeast-1.gs2io.com/matchmaking"
            )
            assert call_args[1]["params"] == {"limit": 10}
            assert call_args[1]["headers"] == {"X-Test": "1"}
            assert "json" not in call_args[1]

        await client.close()

    @pytest.mark.asyncio
    async def test_do_get_omits_empty_query(self, credentials: Credentials) -> None:
        """Test an empty query sends no params."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response({})

            await client.do_get("S", "A", "matchmaking", "/matchmaking", {})

            assert "params" not in mock_request.call_args[1]
            assert "headers" not in mock_request.call_args[1]

        await client.close()

    @pytest.mark.asyncio
    async def test_do_post_sends_json_body(self, credentials: Credentials) -> None:
        """Test POST sends the body as JSON, even when empty."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response({"item": {}})

            await client.do_post("S", "A", "matchmaking", "/matchmaking", {})

            call_args = mock_request.call_args
            assert call_args[0][0] == "POST"
            assert call_args[1]["json"] == {}

        await client.close()

    @pytest.mark.asyncio
    async def test_do_put_sends_json_body(self, credentials: Credentials) -> None:
        """Test PUT sends the body as JSON."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response({"item": {}})

            await client.do_put(
                "S", "A", "matchmaking", "/matchmaking/m1", {"description": "d"}
            )

            call_args = mock_request.call_args
            assert call_args[0][0] == "PUT"
            assert call_args[1]["json"] == {"description": "d"}

        await client.close()

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self, credentials: Credentials) -> None:
        """Test a response without a body decodes to None."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response(None)

            result = await client.do_delete("S", "A", "matchmaking", "/matchmaking/m1")

            assert result is None
            assert mock_request.call_args[0][0] == "DELETE"

        await client.close()

    @pytest.mark.asyncio
    async def test_no_content_returns_none(self, credentials: Credentials) -> None:
        """Test a 204 response decodes to None."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response({}, status_code=204)

            result = await client.do_delete("S", "A", "matchmaking", "/matchmaking/m1")

            assert result is None

        await client.close()


class TestErrorHandling:
    """Tests for error handling."""

    @pytest.mark.asyncio
    async def test_not_connected_raises_error(self, credentials: Credentials) -> None:
        """Test that making request without connecting raises error."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)

        with pytest.raises(Gs2ConnectionError, match="Client not connected"):
            await client.do_get("S", "A", "matchmaking", "/matchmaking")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "error_class"),
        [
            (400, BadRequestError),
            (401, UnauthorizedError),
            (404, NotFoundError),
            (409, ConflictError),
        ],
    )
    async def test_status_maps_to_error_class(
        self,
        credentials: Credentials,
        status_code: int,
        error_class: type[Gs2APIError],
    ) -> None:
        """Test HTTP error statuses raise the matching exception."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response(
                status_code=status_code, text='{"message": "nope"}'
            )

            with pytest.raises(error_class) as exc_info:
                await client.do_get("Gs2Matchmaking", "GetMatchmaking", "matchmaking", "/x")

            assert exc_info.value.status_code == status_code
            assert "Gs2Matchmaking.GetMatchmaking" in str(exc_info.value)
            assert "nope" in str(exc_info.value)
            # API errors are not retried
            assert mock_request.call_count == 1

        await client.close()

    @pytest.mark.asyncio
    async def test_unmapped_status_raises_base_api_error(
        self, credentials: Credentials
    ) -> None:
        """Test an unknown error status raises Gs2APIError itself."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response(status_code=418, text="teapot")

            with pytest.raises(Gs2APIError) as exc_info:
                await client.do_get("S", "A", "matchmaking", "/x")

            assert type(exc_info.value) is Gs2APIError
            assert exc_info.value.status_code == 418

        await client.close()

    @pytest.mark.asyncio
    async def test_invalid_json_raises_client_error(
        self, credentials: Credentials
    ) -> None:
        """Test an undecodable body raises Gs2ClientError."""
        client = Gs2HTTPClient("ap-northeast-1", credentials)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            response = make_response({})
            response.json.side_effect = ValueError("Expecting value")
            mock_request.return_value = response

            with pytest.raises(Gs2ClientError, match="invalid JSON"):
                await client.do_get("S", "A", "matchmaking", "/x")

        await client.close()


class TestRetries:
    """Tests for retry behavior on transient failures."""

    @pytest.mark.asyncio
    async def test_get_retries_after_timeout(self, credentials: Credentials) -> None:
        """Test GET is retried after a timeout and then succeeds."""
        client = Gs2HTTPClient("ap-northeast-1", credentials, max_retries=3)
        await client.connect()

        with (
            patch.object(
                client._client, "request", new_callable=AsyncMock
            ) as mock_request,
            patch(
                "gs2_matchmaking.client.http_client.asyncio.sleep",
                new_callable=AsyncMock,
            ) as mock_sleep,
        ):
            mock_request.side_effect = [
                TimeoutException("timed out"),
                make_response({"status": "ACTIVE"}),
            ]

            result = await client.do_get("S", "A", "matchmaking", "/x")

            assert result == {"status": "ACTIVE"}
            assert mock_request.call_count == 2
            mock_sleep.assert_awaited_once_with(0.1)

        await client.close()

    @pytest.mark.asyncio
    async def test_get_raises_after_all_retries(
        self, credentials: Credentials
    ) -> None:
        """Test GET gives up with Gs2ConnectionError after max_retries."""
        client = Gs2HTTPClient("ap-northeast-1", credentials, max_retries=3)
        await client.connect()

        with (
            patch.object(
                client._client, "request", new_callable=AsyncMock
            ) as mock_request,
            patch(
                "gs2_matchmaking.client.http_client.asyncio.sleep",
                new_callable=AsyncMock,
            ),
        ):
            mock_request.side_effect = ConnectError("refused")

            with pytest.raises(Gs2ConnectionError, match="HTTP error"):
                await client.do_get("S", "A", "matchmaking", "/x")

            assert mock_request.call_count == 3

        await client.close()

    @pytest.mark.asyncio
    async def test_post_is_not_retried(self, credentials: Credentials) -> None:
        """Test POST is attempted once so joins are never duplicated."""
        client = Gs2HTTPClient("ap-northeast-1", credentials, max_retries=3)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.side_effect = TimeoutException("timed out")

            with pytest.raises(Gs2ConnectionError, match="Request timeout"):
                await client.do_post("S", "A", "matchmaking", "/x", {})

            assert mock_request.call_count == 1

        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["PUT", "DELETE"])
    @pytest.mark.parametrize(
        "error",
        [TimeoutException("timed out"), ConnectError("refused")],
        ids=["timeout", "connect"],
    )
    async def test_put_and_delete_are_retried(
        self, credentials: Credentials, method: str, error: Exception
    ) -> None:
        """Test PUT and DELETE are retried after transport errors."""
        client = Gs2HTTPClient("ap-northeast-1", credentials, max_retries=3)
        await client.connect()

        with (
            patch.object(
                client._client, "request", new_callable=AsyncMock
            ) as mock_request,
            patch(
                "gs2_matchmaking.client.http_client.asyncio.sleep",
                new_callable=AsyncMock,
            ) as mock_sleep,
        ):
            mock_request.side_effect = [error, error, make_response({"item": {}})]

            result = await _send(client, method)

            assert result == {"item": {}}
            assert mock_request.call_count == 3
            assert all(c[0][0] == method for c in mock_request.call_args_list)
            assert [c[0][0] for c in mock_sleep.await_args_list] == [0.1, 0.2]

        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["PUT", "DELETE"])
    @pytest.mark.parametrize("status_code", [500, 503])
    async def test_server_error_is_not_retried(
        self, credentials: Credentials, method: str, status_code: int
    ) -> None:
        """Test a 5xx response on PUT or DELETE is raised without retrying."""
        client = Gs2HTTPClient("ap-northeast-1", credentials, max_retries=3)
        await client.connect()

        with patch.object(
            client._client, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = make_response(
                status_code=status_code, text="unavailable"
            )

            with pytest.raises(Gs2APIError) as exc_info:
                await _send(client, method)

            assert exc_info.value.status_code == status_code
            assert mock_request.call_count == 1

        await client.close()


class TestLogging:
    """Tests for what the client writes to the log."""

    @pytest.mark.asyncio
    async def test_credentials_and_tokens_are_not_logged(
        self, credentials: Credentials, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test DEBUG logs never contain the client secret or an access token."""
        caplog.set_level(logging.DEBUG, logger="gs2_matchmaking")
        client = Gs2MatchmakingClient("ap-northeast-1", credentials, max_retries=2)
        await client.connect()

        with (
            patch.object(
                client._client, "request", new_callable=AsyncMock
            ) as mock_request,
            patch(
                "gs2_matchmaking.client.http_client.asyncio.sleep",
                new_callable=AsyncMock,
            ),
        ):
            mock_request.return_value = make_response(
                {"item": {"gatheringId": "g-1", "joinPlayer": 2}}
            )
            await client.room_join_gathering(
                {
                    "matchmakingName": "ranked",
                    "gatheringId": "g-1",
                    "accessToken": "player-token-123",
                }
            )

            mock_request.side_effect = TimeoutException("timed out")
            mock_request.return_value = None
            with pytest.raises(Gs2ConnectionError):
                await client.room_leave_gathering(
                    {
                        "matchmakingName": "ranked",
                        "gatheringId": "g-1",
                        "accessToken": "player-token-123",
                    }
                )

        await client.close()

        assert caplog.records
        for record in caplog.records:
            message = record.getMessage()
            assert "player-token-123" not in message
            assert "secret-xyz" not in message


class TestEndpointUrl:
    def test_client_and_config_agree(self, credentials: Credentials) -> None:
        """Test the client and its config build the same endpoint URL."""
        config = ClientConfig(
            region="eu-west-1",
            credentials=credentials,
            endpoint_url_template="http://localhost:9000/{service}/{region}/",
        )
        client = Gs2HTTPClient.from_config(config)

        expected = "http://localhost:9000/matchmaking/eu-west-1"
        assert config.endpoint_url("matchmaking") == expected
        assert client.endpoint_url("matchmaking") == expected

    def test_trailing_slash_removed_without_config(
        self, credentials: Credentials
    ) -> None:
        client = Gs2HTTPClient(
            "us-east-1",
            credentials,
            endpoint_url_template="http://localhost:9000/{service}/",
        )
        assert client.endpoint_url("matchmaking") == "http://localhost:9000/matchmaking"


async def _send(client: Gs2HTTPClient, method: str):
    if method == "PUT":
        return await client.do_put("S", "A", "matchmaking", "/x", {"k": "v"})
    return await client.do_delete("S", "A", "matchmaking", "/x")
