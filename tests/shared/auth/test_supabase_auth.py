"""Tests for the Supabase Auth adapter against a mocked GoTrue API."""
import json

import httpx
import pytest

from src.shared.auth.supabase_auth import AuthError, SupabaseAuth, SupabaseAuthSettings

SETTINGS = SupabaseAuthSettings(url="http://supabase.test", anon_key="anon-key")


def make_auth(handler) -> SupabaseAuth:
    client = httpx.AsyncClient(base_url=SETTINGS.url, transport=httpx.MockTransport(handler))
    return SupabaseAuth(SETTINGS, client=client)


class TestGetSession:
    @pytest.mark.asyncio
    async def test_valid_token_resolves_session(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["authorization"] = request.headers["Authorization"]
            return httpx.Response(200, json={"id": "user-1", "email": "operator@firm.com"})

        session = await make_auth(handler).get_session("token-123")

        assert session is not None
        assert session.user_id == "user-1"
        assert session.email == "operator@firm.com"
        assert session.access_token == "token-123"
        assert seen == {"path": "/auth/v1/user", "authorization": "Bearer token-123"}

    @pytest.mark.asyncio
    async def test_missing_token_skips_lookup(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        assert await make_auth(handler).get_session(None) is None
        assert await make_auth(handler).get_session("") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_rejected_token_is_no_session(self, status_code):
        auth = make_auth(lambda request: httpx.Response(status_code, json={"msg": "invalid JWT"}))

        assert await auth.get_session("expired") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>gateway</html>"),
            httpx.Response(200, json={"email": "operator@firm.com"}),
            httpx.Response(200, json=["user-1"]),
        ],
    )
    async def test_unreadable_user_body_is_no_session(self, response):
        auth = make_auth(lambda request: response)

        assert await auth.get_session("token-123") is None

    @pytest.mark.asyncio
    async def test_server_error_is_raised(self):
        auth = make_auth(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(httpx.HTTPStatusError):
            await auth.get_session("token-123")


class TestSignUp:
    @pytest.mark.asyncio
    async def test_sign_up_posts_credentials(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "user-2"})

        await make_auth(handler).sign_up("admin@firm.com", "secret1")

        assert seen == {"path": "/auth/v1/signup", "body": {"email": "admin@firm.com", "password": "secret1"}}

    @pytest.mark.asyncio
    async def test_provider_message_becomes_auth_error(self):
        auth = make_auth(lambda request: httpx.Response(422, json={"msg": "User already registered"}))

        with pytest.raises(AuthError, match="User already registered"):
            await auth.sign_up("admin@firm.com", "secret1")

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_auth_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(AuthError):
            await make_auth(handler).sign_up("admin@firm.com", "secret1")


class TestResendConfirmation:
    @pytest.mark.asyncio
    async def test_resend_requests_signup_confirmation(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={})

        await make_auth(handler).resend_confirmation("admin@firm.com")

        assert seen == {"path": "/auth/v1/resend", "body": {"type": "signup", "email": "admin@firm.com"}}

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        auth = make_auth(lambda request: httpx.Response(429, text="rate limited"))

        with pytest.raises(AuthError, match="rate limited"):
            await auth.resend_confirmation("admin@firm.com")


def test_lazy_client_sends_anon_key():
    auth = SupabaseAuth(SETTINGS)

    assert auth.client.headers["apikey"] == "anon-key"
    assert str(auth.client.base_url) == "http://supabase.test"
