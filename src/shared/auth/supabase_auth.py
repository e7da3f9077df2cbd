"""Session lookup and operator sign-up against the Supabase Auth (GoTrue) REST API."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from httpx import AsyncClient, HTTPError, Response
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """An authenticated operator session."""
    user_id: str = Field(..., description="Auth provider user ID")
    email: str | None = None
    access_token: str = Field(..., description="Bearer token the session was resolved from")

    model_config = {"frozen": True}


class AuthError(Exception):
    """Raised when the auth provider rejects a sign-up or confirmation request."""
    pass


class SessionProvider(ABC):
    """Abstract boundary to the session/auth collaborator."""

    @abstractmethod
    async def get_session(self, access_token: str | None) -> Session | None:
        """
        Resolve the session behind an access token.

        Returns:
            The Session, or None when the token is missing, expired or unknown.
        """
        pass

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> None:
        """Register an operator; the provider sends a confirmation email."""
        pass

    @abstractmethod
    async def resend_confirmation(self, email: str) -> None:
        """Ask the provider to send the sign-up confirmation email again."""
        pass


class SupabaseAuthSettings(BaseModel):
    """Settings for the Supabase Auth adapter."""
    url: str = Field(..., description="Supabase project URL")
    anon_key: Optional[str] = Field(None, description="Supabase anon (public) API key")


class SupabaseAuth(SessionProvider):
    """
    Supabase Auth adapter built on httpx.

    Uses the GoTrue endpoints:
    - GET  /auth/v1/user    resolve the user behind a bearer token
    - POST /auth/v1/signup  register with email + password
    - POST /auth/v1/resend  resend the signup confirmation email
    """

    def __init__(self, settings: SupabaseAuthSettings, client: Optional[AsyncClient] = None):
        """
        Initialize the adapter.

        Args:
            settings: Supabase project configuration
            client: Optional httpx.AsyncClient. If not provided, one is created lazily.
        """
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> AsyncClient:
        """Get or create the HTTP client (lazy initialization)."""
        if self._client is None:
            headers = {}
            if self.settings.anon_key:
                headers["apikey"] = self.settings.anon_key
            self._client = AsyncClient(base_url=self.settings.url.rstrip("/"), headers=headers)
        return self._client

    async def close(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_session(self, access_token: str | None) -> Session | None:
        if not access_token:
            return None

        response = await self.client.get(
            "/auth/v1/user",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.status_code in (401, 403):
            return None
        response.raise_for_status()

        try:
            user = response.json()
            return Session(user_id=str(user["id"]), email=user.get("email"), access_token=access_token)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Unreadable user response from auth provider, treating as no session: %s", e)
            return None

    async def sign_up(self, email: str, password: str) -> None:
        try:
            response = await self.client.post("/auth/v1/signup", json={"email": email, "password": password})
        except HTTPError as e:
            raise AuthError(f"Sign up request failed: {e}") from e
        self._raise_for_auth_error(response)
        logger.info("Sign up requested for %s", email)

    async def resend_confirmation(self, email: str) -> None:
        try:
            response = await self.client.post("/auth/v1/resend", json={"type": "signup", "email": email})
        except HTTPError as e:
            raise AuthError(f"Resend confirmation request failed: {e}") from e
        self._raise_for_auth_error(response)
        logger.info("Confirmation email re-sent to %s", email)

    @staticmethod
    def _raise_for_auth_error(response: Response) -> None:
        if response.is_success:
            return
        raise AuthError(_error_message(response))


def _error_message(response: Response) -> str:
    """Pull the human-readable message out of a GoTrue error body."""
    try:
        body: Any = response.json()
    except ValueError:
        return response.text or f"Auth request failed with status {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"Auth request failed with status {response.status_code}"
