"""Unit tests for the SupabaseAuthClient."""

import base64
import json

import httpx
import pytest

from article_hub.infrastructure.supabase import SupabaseAuthClient
from article_hub.domain.exceptions import AuthProviderError


# ── Helpers ──


def _fake_jwt(claims: dict) -> str:
    """Build an unsigned JWT-shaped token carrying the given claims."""

    def _segment(data: dict) -> str:
        raw = json.dumps(data).encode()
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()

    signature = base64.urlsafe_b64encode(b"signature").rstrip(b"=").decode()
    return f"{_segment({'alg': 'HS256'})}.{_segment(claims)}.{signature}"


def _client(handler) -> SupabaseAuthClient:
    return SupabaseAuthClient(
        base_url="https://project.supabase.co/",
        anon_key="anon-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


# ── Tests ──


@pytest.mark.asyncio
async def test_get_identity_parses_user_and_session_claim():
    token = _fake_jwt({"sub": "user-123", "session_id": "sess-abc"})
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "user-123", "email": "ed@example.com"})

    identity = await _client(handler).get_identity(token)

    assert identity is not None
    assert identity.subject_id == "user-123"
    assert identity.email == "ed@example.com"
    assert identity.session_id == "sess-abc"
    assert str(seen[0].url) == "https://project.supabase.co/auth/v1/user"
    assert seen[0].headers["apikey"] == "anon-key"
    assert seen[0].headers["authorization"] == f"Bearer {token}"


@pytest.mark.asyncio
async def test_get_identity_falls_back_to_subject_for_opaque_tokens():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": "user-123", "email": None})

    identity = await _client(handler).get_identity("opaque")

    assert identity is not None
    assert identity.session_id == "user-123"
    assert identity.email is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "token",
    [
        "only.two",
        "not.a.jwt",
        "eyJhbGciOiJIUzI1NiJ9.W10.c2ln",  # claims segment is a JSON list
        _fake_jwt({"sub": "user-123", "session_id": 42}),
    ],
)
async def test_get_identity_tolerates_malformed_tokens(token: str):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": "user-123", "email": "ed@example.com"})

    identity = await _client(handler).get_identity(token)

    assert identity is not None
    assert identity.session_id == "user-123"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403])
async def test_get_identity_rejected_token_returns_none(status_code: int):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"msg": "invalid JWT"})

    assert await _client(handler).get_identity("expired") is None


@pytest.mark.asyncio
async def test_get_identity_server_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"msg": "database unavailable"})

    with pytest.raises(AuthProviderError) as exc_info:
        await _client(handler).get_identity("token")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "database unavailable"
    assert not exc_info.value.is_client_error


@pytest.mark.asyncio
async def test_sign_in_with_password_returns_tokens():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"access_token": "at", "refresh_token": "rt", "expires_in": 3600},
        )

    tokens = await _client(handler).sign_in_with_password("ed@example.com", "secret")

    assert tokens.access_token == "at"
    assert tokens.refresh_token == "rt"
    assert seen[0].url.path == "/auth/v1/token"
    assert seen[0].url.params["grant_type"] == "password"
    assert json.loads(seen[0].content) == {"email": "ed@example.com", "password": "secret"}


@pytest.mark.asyncio
async def test_sign_in_error_uses_error_description():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
        )

    with pytest.raises(AuthProviderError) as exc_info:
        await _client(handler).sign_in_with_password("ed@example.com", "wrong")

    assert exc_info.value.is_client_error
    assert exc_info.value.message == "Invalid login credentials"


@pytest.mark.asyncio
async def test_refresh_session_exchanges_refresh_token():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"access_token": "at-2", "refresh_token": "rt-2"})

    tokens = await _client(handler).refresh_session("rt-1")

    assert tokens is not None
    assert (tokens.access_token, tokens.refresh_token) == ("at-2", "rt-2")
    assert seen[0].url.path == "/auth/v1/token"
    assert seen[0].url.params["grant_type"] == "refresh_token"
    assert json.loads(seen[0].content) == {"refresh_token": "rt-1"}


@pytest.mark.asyncio
async def test_refresh_session_rejected_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"error": "invalid_grant", "error_description": "Invalid Refresh Token"},
        )

    assert await _client(handler).refresh_session("revoked") is None


@pytest.mark.asyncio
async def test_refresh_session_server_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="upstream down")

    with pytest.raises(AuthProviderError) as exc_info:
        await _client(handler).refresh_session("rt-1")

    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "upstream down"


@pytest.mark.asyncio
async def test_sign_up_and_sign_out():
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path.endswith("/logout"):
            return httpx.Response(204)
        return httpx.Response(200, json={"id": "new-user"})

    client = _client(handler)
    await client.sign_up("new@example.com", "secret1")
    await client.sign_out("token")

    assert paths == ["/auth/v1/signup", "/auth/v1/logout"]


@pytest.mark.asyncio
async def test_transport_failure_becomes_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AuthProviderError) as exc_info:
        await _client(handler).get_identity("token")

    assert exc_info.value.status_code == 503
