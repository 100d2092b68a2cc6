"""
Tests for the Powerlink client.

Tests cover:
- Client identity and auth headers
- Wire format of sent requests (via httpx.MockTransport)
- Error mapping from HTTP status and transport failures
- Convenience methods
"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from powerlink_node.integrations.base import (
    AuthenticationError,
    IntegrationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from powerlink_node.integrations.powerlink import (
    BASE_URL,
    FieldValue,
    OutgoingRequest,
    PowerlinkClient,
    PowerlinkConfig,
)


@pytest.fixture
def client(powerlink_config, transport):
    return PowerlinkClient(powerlink_config, transport=transport)


# =============================================================================
# PowerlinkConfig Tests
# =============================================================================


class TestPowerlinkConfig:
    """Tests for PowerlinkConfig."""

    def test_defaults(self):
        config = PowerlinkConfig(api_key="k")
        assert config.base_url == "https://api.powerlink.co.il/api"
        assert config.log_requests is False

    def test_empty_key_allowed(self):
        """The key is not validated locally."""
        assert PowerlinkConfig().api_key == ""


# =============================================================================
# PowerlinkClient Tests
# =============================================================================


class TestPowerlinkClient:
    """Tests for PowerlinkClient."""

    def test_client_name(self, client):
        assert client.name == "powerlink"

    def test_auth_headers(self, client, api_key):
        assert client._get_auth_headers() == {"tokenid": api_key}

    @pytest.mark.asyncio
    async def test_send_posts_json(self, client, transport, api_key):
        transport.response = httpx.Response(200, json={"success": True})
        outgoing = OutgoingRequest(
            method="POST",
            url=f"{BASE_URL}/record/1",
            headers={"tokenid": api_key},
            body={"name": "Bob"},
        )

        async with client:
            result = await client.send(outgoing)

        assert result == {"success": True}
        sent = transport.last_request
        assert sent.method == "POST"
        assert str(sent.url) == f"{BASE_URL}/record/1"
        assert sent.headers["tokenid"] == api_key
        assert sent.headers["content-type"] == "application/json"
        assert transport.last_json() == {"name": "Bob"}

    @pytest.mark.asyncio
    async def test_send_without_body(self, client, transport):
        outgoing = OutgoingRequest(method="DELETE", url=f"{BASE_URL}/record/1/abc")

        async with client:
            await client.send(outgoing)

        assert transport.last_request.content == b""

    @pytest.mark.asyncio
    async def test_send_query_params(self, client, transport):
        outgoing = OutgoingRequest(
            method="POST", url=f"{BASE_URL}/query", params={"api_key": "k"}, body={}
        )

        async with client:
            await client.send(outgoing)

        assert transport.last_request.url.params["api_key"] == "k"

    @pytest.mark.asyncio
    async def test_empty_response_body(self, client, transport):
        transport.response = httpx.Response(204)

        async with client:
            result = await client.send(OutgoingRequest(method="DELETE", url=f"{BASE_URL}/x"))

        assert result is None

    @pytest.mark.asyncio
    async def test_closes_http_client(self, client):
        async with client:
            await client.send(OutgoingRequest(method="POST", url=f"{BASE_URL}/query"))
            assert client._client is not None

        assert client._client is None


# =============================================================================
# Error Mapping Tests
# =============================================================================


class TestErrorMapping:
    """Remote failures surface as IntegrationError subtypes."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "error_type"),
        [
            (400, ValidationError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (422, ValidationError),
            (500, IntegrationError),
            (503, IntegrationError),
        ],
    )
    async def test_status_mapping(self, powerlink_config, make_transport, status, error_type):
        transport = make_transport(httpx.Response(status, text="nope"))
        client = PowerlinkClient(powerlink_config, transport=transport)

        async with client:
            with pytest.raises(error_type) as exc_info:
                await client.send(OutgoingRequest(method="POST", url=f"{BASE_URL}/query"))

        assert exc_info.value.status_code == status
        assert exc_info.value.response_body == "nope"
        assert exc_info.value.integration == "powerlink"
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_rate_limit_carries_retry_after(self, powerlink_config, make_transport):
        transport = make_transport(
            httpx.Response(429, headers={"Retry-After": "30"}, text="slow down")
        )
        client = PowerlinkClient(powerlink_config, transport=transport)

        async with client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.send(OutgoingRequest(method="POST", url=f"{BASE_URL}/query"))

        assert exc_info.value.retry_after == 30.0
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_network_error(self, powerlink_config, make_transport):
        transport = make_transport(httpx.ConnectError("connection refused"))
        client = PowerlinkClient(powerlink_config, transport=transport)

        async with client:
            with pytest.raises(IntegrationError, match="Network error") as exc_info:
                await client.send(OutgoingRequest(method="POST", url=f"{BASE_URL}/query"))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_protocol_error(self, powerlink_config, make_transport):
        transport = make_transport(httpx.RemoteProtocolError("Server disconnected"))
        client = PowerlinkClient(powerlink_config, transport=transport)

        async with client:
            with pytest.raises(IntegrationError, match="Network error") as exc_info:
                await client.send(OutgoingRequest(method="POST", url=f"{BASE_URL}/query"))

        assert isinstance(exc_info.value.__cause__, httpx.RemoteProtocolError)

    @pytest.mark.asyncio
    async def test_rate_limit_with_date_retry_after(self, powerlink_config, make_transport):
        transport = make_transport(
            httpx.Response(
                429, headers={"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"}, text=""
            )
        )
        client = PowerlinkClient(powerlink_config, transport=transport)

        async with client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.send(OutgoingRequest(method="POST", url=f"{BASE_URL}/query"))

        assert exc_info.value.retry_after is None

    @pytest.mark.asyncio
    async def test_timeout(self, powerlink_config, make_transport):
        transport = make_transport(httpx.ReadTimeout("timed out"))
        client = PowerlinkClient(powerlink_config, transport=transport)

        async with client:
            with pytest.raises(IntegrationError, match="Request timeout"):
                await client.send(OutgoingRequest(method="POST", url=f"{BASE_URL}/query"))

    @pytest.mark.asyncio
    async def test_malformed_json(self, powerlink_config, make_transport):
        transport = make_transport(httpx.Response(200, text="<html>oops</html>"))
        client = PowerlinkClient(powerlink_config, transport=transport)

        async with client:
            with pytest.raises(IntegrationError, match="Malformed response body"):
                await client.send(OutgoingRequest(method="POST", url=f"{BASE_URL}/query"))

    def test_error_string(self):
        error = IntegrationError("Request failed", "powerlink", status_code=500)
        assert str(error) == "[powerlink] Request failed (status=500)"


# =============================================================================
# Convenience Method Tests
# =============================================================================


class TestConvenienceMethods:
    """Each convenience method sends the matching built request."""

    @pytest.mark.asyncio
    async def test_query(self, client, transport):
        transport.response = httpx.Response(200, json={"data": {"Data": []}})

        async with client:
            result = await client.query(
                1, page_size=10, query_params=[FieldValue(fieldId="name", fieldValue="Bob")]
            )

        assert result == {"data": {"Data": []}}
        body = json.loads(transport.last_request.content)
        assert body["page_size"] == 10
        assert body["query"] == "(name = Bob)"

    @pytest.mark.asyncio
    async def test_add_comment(self, client, transport):
        async with client:
            await client.add_comment(1, "abc", "hello")

        assert str(transport.last_request.url) == f"{BASE_URL}/record/1/abc/Note"
        assert transport.last_json()["notetext"] == "<span>hello</span>"

    @pytest.mark.asyncio
    async def test_add_task(self, client, transport):
        async with client:
            await client.add_task("owner-1", 2, "abc", "Follow up")

        body = transport.last_json()
        assert str(transport.last_request.url) == f"{BASE_URL}/v2/record/10"
        assert body["ownerid"] == "owner-1"
        assert body["objecttypecode"] == 2

    @pytest.mark.asyncio
    async def test_record_methods_delegate_to_send(self, client):
        with patch.object(client, "send", new_callable=AsyncMock) as mock_send:
            mock_send.return_value = {"success": True}

            await client.add_record(1, [FieldValue(fieldId="a", fieldValue="b")])
            await client.update_record(1, "abc", [FieldValue(fieldId="a", fieldValue="c")])
            await client.delete_record(1, "abc")

        methods = [call.args[0].method for call in mock_send.call_args_list]
        assert methods == ["POST", "PUT", "DELETE"]
        assert mock_send.call_args_list[1].args[0].body == {"a": "c"}
