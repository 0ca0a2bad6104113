"""Unit tests for endpoints, the httpx gateway and the canned gateway."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from vitesse.models.auth import AuthResponse
from vitesse.models.candidate import Candidate, CandidateDraft
from vitesse.models.enums import HTTPMethod
from vitesse.network import endpoints
from vitesse.network.canned import CannedGateway
from vitesse.network.errors import (
    DecodingError,
    InvalidEndpointError,
    MissingTokenError,
    ServerError,
    UnauthorizedError,
    UnknownError,
)
from vitesse.network.gateway import HttpGateway, build_url
from vitesse.storage.token_store import MemoryTokenStore

BASE_URL = "http://api.test"

CANDIDATE_JSON = {
    "id": "1",
    "firstName": "John",
    "lastName": "Doe",
    "email": "john@example.com",
    "phone": "123456789",
    "linkedinURL": None,
    "note": None,
    "isFavorite": False,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _mock_client(
    response: httpx.Response | None = None,
    side_effect: Exception | None = None,
) -> AsyncMock:
    """Return an ``httpx.AsyncClient`` stand-in usable as an async context manager."""
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client.request = AsyncMock(return_value=response, side_effect=side_effect)
    return mock_client


def _gateway(token: str | None = "tok") -> HttpGateway:
    return HttpGateway(BASE_URL, MemoryTokenStore(token=token), timeout=5.0)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


class TestEndpoints:
    """Endpoint factories and body serialization."""

    def test_endpoint_table(self) -> None:
        assert endpoints.login("a@b.co", "pw").key == (HTTPMethod.POST, "/user/auth")
        assert endpoints.register("a@b.co", "pw", "A", "B").key == (
            HTTPMethod.POST, "/user/register",
        )
        assert endpoints.candidates().key == (HTTPMethod.GET, "/candidate")
        assert endpoints.delete_candidate("7").key == (HTTPMethod.DELETE, "/candidate/7")
        assert endpoints.toggle_favorite("7").key == (
            HTTPMethod.POST, "/candidate/7/favorite",
        )

    def test_only_user_endpoints_are_anonymous(self) -> None:
        draft = CandidateDraft(first_name="A", last_name="B", email="a@b.co")
        assert endpoints.login("a@b.co", "pw").requires_authentication is False
        assert endpoints.register("a@b.co", "pw", "A", "B").requires_authentication is False
        assert endpoints.candidates().requires_authentication is True
        assert endpoints.create_candidate(draft).requires_authentication is True
        assert endpoints.delete_candidate("1").requires_authentication is True
        assert endpoints.toggle_favorite("1").requires_authentication is True

    def test_draft_body_uses_camel_case_and_drops_absent_fields(self) -> None:
        draft = CandidateDraft(
            first_name="John", last_name="Doe", email="john@example.com",
            linkedin_url="https://linkedin.com/in/jdoe",
        )
        assert endpoints.create_candidate(draft).json_body() == {
            "firstName": "John",
            "lastName": "Doe",
            "email": "john@example.com",
            "linkedinURL": "https://linkedin.com/in/jdoe",
        }

    def test_register_body(self) -> None:
        body = endpoints.register("a@b.co", "pw", "Ann", "Bee").json_body()
        assert body == {
            "email": "a@b.co", "password": "pw", "firstName": "Ann", "lastName": "Bee",
        }

    def test_empty_id_makes_endpoint_invalid(self) -> None:
        assert endpoints.delete_candidate("").is_valid is False
        assert endpoints.toggle_favorite("").is_valid is False
        assert endpoints.delete_candidate("a b").is_valid is False
        assert endpoints.candidates().is_valid is True


class TestBuildUrl:
    """Joining endpoints onto the base URL."""

    def test_joins_path(self) -> None:
        assert build_url(BASE_URL, endpoints.candidates()) == "http://api.test/candidate"

    def test_keeps_base_path_prefix(self) -> None:
        url = build_url("https://api.test/v1/", endpoints.delete_candidate("9"))
        assert url == "https://api.test/v1/candidate/9"

    @pytest.mark.parametrize("base_url", ["", "not a url", "ftp://api.test", "http://"])
    def test_rejects_bad_base_url(self, base_url: str) -> None:
        with pytest.raises(InvalidEndpointError):
            build_url(base_url, endpoints.candidates())


# ---------------------------------------------------------------------------
# HttpGateway
# ---------------------------------------------------------------------------


class TestHttpGatewayRequest:
    """Typed requests through httpx."""

    @pytest.mark.asyncio
    async def test_decodes_candidate_list_with_bearer_token(self) -> None:
        response = httpx.Response(200, json=[CANDIDATE_JSON])
        mock_client = _mock_client(response)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            result = await _gateway().request(endpoints.candidates(), list[Candidate])

        assert result == [Candidate.model_validate(CANDIDATE_JSON)]
        assert result[0].first_name == "John"
        mock_client_class.assert_called_once_with(timeout=5.0)

        call_args = mock_client.request.call_args
        assert call_args.args == ("GET", "http://api.test/candidate")
        assert call_args.kwargs["headers"]["Authorization"] == "Bearer tok"
        assert call_args.kwargs["json"] is None

    @pytest.mark.asyncio
    async def test_login_is_sent_without_token(self) -> None:
        response = httpx.Response(200, json={"token": "t0k", "isAdmin": True})
        mock_client = _mock_client(response)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            result = await _gateway(token=None).request(
                endpoints.login("a@b.co", "pw"), AuthResponse
            )

        assert result == AuthResponse(token="t0k", is_admin=True)
        call_args = mock_client.request.call_args
        assert call_args.args == ("POST", "http://api.test/user/auth")
        assert "Authorization" not in call_args.kwargs["headers"]
        assert call_args.kwargs["json"] == {"email": "a@b.co", "password": "pw"}

    @pytest.mark.asyncio
    async def test_missing_token_never_sends(self) -> None:
        with patch("httpx.AsyncClient") as mock_client_class:
            with pytest.raises(MissingTokenError):
                await _gateway(token=None).request(endpoints.candidates(), list[Candidate])
            mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_endpoint_never_sends(self) -> None:
        gateway = HttpGateway("not a url", MemoryTokenStore(token="tok"))
        with patch("httpx.AsyncClient") as mock_client_class:
            with pytest.raises(InvalidEndpointError):
                await gateway.request_no_body(endpoints.delete_candidate("1"))
            mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_unauthorized_is_distinct_from_server_error(self) -> None:
        mock_client = _mock_client(httpx.Response(401, json={"message": "bad token"}))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            with pytest.raises(UnauthorizedError):
                await _gateway().request(endpoints.candidates(), list[Candidate])

    @pytest.mark.asyncio
    async def test_server_error_carries_status_and_message(self) -> None:
        mock_client = _mock_client(httpx.Response(500, json={"message": "Database down"}))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            with pytest.raises(ServerError) as exc_info:
                await _gateway().request(endpoints.candidates(), list[Candidate])

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Database down"

    @pytest.mark.asyncio
    async def test_server_error_falls_back_to_reason_phrase(self) -> None:
        mock_client = _mock_client(httpx.Response(404))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            with pytest.raises(ServerError) as exc_info:
                await _gateway().request_no_body(endpoints.delete_candidate("1"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Not Found"

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_server_error(self) -> None:
        mock_client = _mock_client(side_effect=httpx.ConnectError("Connection refused"))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            with pytest.raises(ServerError) as exc_info:
                await _gateway().request(endpoints.candidates(), list[Candidate])

        assert exc_info.value.status_code is None
        assert exc_info.value.message == "Connection refused"
        mock_client.request.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_schema_mismatch_is_decoding_error(self) -> None:
        mock_client = _mock_client(httpx.Response(200, json=[{"id": "1"}]))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            with pytest.raises(DecodingError):
                await _gateway().request(endpoints.candidates(), list[Candidate])

    @pytest.mark.asyncio
    async def test_non_json_body_is_decoding_error(self) -> None:
        mock_client = _mock_client(httpx.Response(200, content=b"<html>"))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            with pytest.raises(DecodingError):
                await _gateway().request(endpoints.toggle_favorite("1"), Candidate)

    @pytest.mark.asyncio
    async def test_request_no_body_ignores_empty_response(self) -> None:
        mock_client = _mock_client(httpx.Response(200))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            result = await _gateway().request_no_body(endpoints.delete_candidate("1"))

        assert result is None
        assert mock_client.request.call_args.args == ("DELETE", "http://api.test/candidate/1")

    @pytest.mark.asyncio
    async def test_token_is_read_per_request(self) -> None:
        store = MemoryTokenStore(token="first")
        gateway = HttpGateway(BASE_URL, store)
        mock_client = _mock_client(httpx.Response(200, json=[]))

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = mock_client
            await gateway.request(endpoints.candidates(), list[Candidate])
            store.save("second")
            await gateway.request(endpoints.candidates(), list[Candidate])

        headers = [c.kwargs["headers"]["Authorization"] for c in mock_client.request.call_args_list]
        assert headers == ["Bearer first", "Bearer second"]


# ---------------------------------------------------------------------------
# CannedGateway
# ---------------------------------------------------------------------------


class TestCannedGateway:
    """Canned responses follow the same error semantics."""

    @pytest.mark.asyncio
    async def test_serves_models_by_alias(self) -> None:
        gateway = CannedGateway(token="tok")
        candidate = Candidate.model_validate(CANDIDATE_JSON)
        gateway.respond(endpoints.candidates(), [candidate])

        assert gateway.responses[endpoints.candidates().key][0]["firstName"] == "John"
        result = await gateway.request(endpoints.candidates(), list[Candidate])
        assert result == [candidate]
        assert gateway.calls == [endpoints.candidates()]

    @pytest.mark.asyncio
    async def test_no_canned_response_is_unknown(self) -> None:
        gateway = CannedGateway(token="tok")
        with pytest.raises(UnknownError):
            await gateway.request(endpoints.candidates(), list[Candidate])

    @pytest.mark.asyncio
    async def test_missing_token_is_not_recorded(self) -> None:
        gateway = CannedGateway()
        gateway.respond(endpoints.candidates(), [])
        with pytest.raises(MissingTokenError):
            await gateway.request(endpoints.candidates(), list[Candidate])
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_invalid_endpoint(self) -> None:
        gateway = CannedGateway(token="tok")
        with pytest.raises(InvalidEndpointError):
            await gateway.request_no_body(endpoints.delete_candidate(""))

    @pytest.mark.asyncio
    async def test_failure_is_raised(self) -> None:
        gateway = CannedGateway(token="tok")
        gateway.fail(endpoints.delete_candidate("1"), ServerError(500, "Server error"))
        with pytest.raises(ServerError) as exc_info:
            await gateway.request_no_body(endpoints.delete_candidate("1"))
        assert exc_info.value == ServerError(500, "Server error")

    @pytest.mark.asyncio
    async def test_wrong_payload_shape_is_decoding_error(self) -> None:
        gateway = CannedGateway(token="tok")
        gateway.respond(endpoints.toggle_favorite("1"), {"unexpected": True})
        with pytest.raises(DecodingError):
            await gateway.request(endpoints.toggle_favorite("1"), Candidate)

    @pytest.mark.asyncio
    async def test_custom_exception_passes_through(self) -> None:
        gateway = CannedGateway(token="tok")
        gateway.fail(endpoints.candidates(), RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            await gateway.request(endpoints.candidates(), list[Candidate])
