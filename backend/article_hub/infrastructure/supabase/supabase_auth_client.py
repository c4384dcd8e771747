"""Supabase Auth (GoTrue) client — implements the IdentityProvider interface.

Talks to the GoTrue REST API (``{supabase_url}/auth/v1``) with httpx:

    GET  /user                              validate an access token
    POST /token?grant_type=password         sign in
    POST /token?grant_type=refresh_token    exchange a refresh token
    POST /signup                            register
    POST /logout                            revoke the session
"""

import logging

import httpx
from jose import JWTError, jwt

from article_hub.application.interfaces.identity_provider import IdentityProvider
from article_hub.domain.entities import ExternalIdentity, ProviderTokens
from article_hub.domain.exceptions import AuthProviderError

logger = logging.getLogger(__name__)


def _session_id_from_token(access_token: str) -> str | None:
    """Read the ``session_id`` claim from a GoTrue JWT without verifying it.

    The signature has already been checked by the ``/user`` call.
    """
    try:
        claims = jwt.get_unverified_claims(access_token)
    except JWTError:
        return None
    session_id = claims.get("session_id")
    return session_id if isinstance(session_id, str) else None


class SupabaseAuthClient(IdentityProvider):
    """Infrastructure adapter — connects to Supabase Auth.

    Pass a shared ``httpx.AsyncClient`` to reuse connections across requests;
    without one, each call opens and closes its own client.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/") + "/auth/v1"
        self._anon_key = anon_key
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "supabase"

    def _get_headers(self, access_token: str | None = None) -> dict[str, str]:
        """Standard headers for GoTrue requests."""
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {access_token or self._anon_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: str | None = None,
        params: dict[str, str] | None = None,
        json_body: dict | None = None,
    ) -> httpx.Response:
        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None
        try:
            return await client.request(
                method,
                f"{self._base_url}{path}",
                headers=self._get_headers(access_token),
                params=params,
                json=json_body,
            )
        except httpx.HTTPError as exc:
            logger.error("Supabase auth request %s %s failed: %s", method, path, exc)
            raise AuthProviderError(self.provider_name, 503, str(exc)) from exc
        finally:
            if should_close:
                await client.aclose()

    async def get_identity(self, access_token: str) -> ExternalIdentity | None:
        response = await self._request("GET", "/user", access_token=access_token)

        if response.status_code in (401, 403, 404):
            return None
        if response.status_code != 200:
            self._raise_provider_error(response)

        data = response.json()
        subject_id = data.get("id")
        if not subject_id:
            return None
        return ExternalIdentity(
            subject_id=subject_id,
            email=data.get("email") or None,
            session_id=_session_id_from_token(access_token) or subject_id,
        )

    async def sign_in_with_password(self, email: str, password: str) -> ProviderTokens:
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json_body={"email": email, "password": password},
        )
        if response.status_code != 200:
            self._raise_provider_error(response)
        return self._parse_tokens(response)

    async def refresh_session(self, refresh_token: str) -> ProviderTokens | None:
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "refresh_token"},
            json_body={"refresh_token": refresh_token},
        )
        # GoTrue answers 400 invalid_grant for revoked, reused or unknown refresh tokens.
        if response.status_code in (400, 401, 403):
            logger.debug("Refresh token rejected (%d)", response.status_code)
            return None
        if response.status_code != 200:
            self._raise_provider_error(response)
        return self._parse_tokens(response)

    async def sign_up(self, email: str, password: str) -> None:
        response = await self._request(
            "POST",
            "/signup",
            json_body={"email": email, "password": password},
        )
        if response.status_code not in (200, 201):
            self._raise_provider_error(response)

    async def sign_out(self, access_token: str) -> None:
        response = await self._request("POST", "/logout", access_token=access_token)
        if response.status_code not in (200, 204):
            self._raise_provider_error(response)

    @staticmethod
    def _parse_tokens(response: httpx.Response) -> ProviderTokens:
        data = response.json()
        return ProviderTokens(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
        )

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Extract an error message from a GoTrue error body and raise AuthProviderError."""
        try:
            data = response.json()
            message = (
                data.get("msg")
                or data.get("error_description")
                or data.get("message")
                or data.get("error")
                or response.text
            )
        except ValueError:
            message = response.text

        raise AuthProviderError(
            provider=self.provider_name,
            status_code=response.status_code,
            message=str(message),
        )
