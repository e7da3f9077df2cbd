"""HTTP client for consuming the Onboarding API."""
from uuid import UUID
from typing import Optional
from httpx import AsyncClient, Response

from src.client.schemas import (
    AuthStatusResponse,
    ClientResponse,
    CreateClientRequest,
    DashboardResponse,
    ResendConfirmationRequest,
    SendEmailRequest,
    SendEmailResponse,
    SignUpRequest,
    SubmissionResponse,
    ViewResponse,
)

# Status codes that still carry a SubmissionResponse body
SUBMISSION_STATUSES = {201, 409, 422, 429, 503}


class OnboardingClient:
    """HTTP client for interacting with the Onboarding API."""

    def __init__(self, base_url: str, client: Optional[AsyncClient] = None, access_token: str | None = None):
        """
        Initialize the Onboarding client.

        Args:
            base_url: Base URL of the Onboarding API (e.g., "http://localhost:8000")
            client: Optional httpx.AsyncClient instance. If not provided, a new one will be created.
            access_token: Optional operator access token sent as a bearer token.
        """
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None
        self.access_token = access_token

    async def __aenter__(self):
        """Async context manager entry."""
        if self._owns_client:
            self._client = AsyncClient(base_url=self.base_url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._owns_client and self._client:
            await self._client.aclose()

    @property
    def client(self) -> AsyncClient:
        """Get the underlying httpx client."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    @property
    def _auth_headers(self) -> dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    async def get_client(self, client_id: UUID) -> ClientResponse:
        """
        Get a client by ID.

        Raises:
            httpx.HTTPStatusError: If the request fails (e.g., 404 if not found)
        """
        response: Response = await self.client.get(
            f"/api/v1/clients/{client_id}", headers=self._auth_headers, follow_redirects=False
        )
        response.raise_for_status()
        return ClientResponse(**response.json())

    async def list_clients(self) -> list[ClientResponse]:
        """List every client, newest first."""
        response: Response = await self.client.get(
            "/api/v1/clients/", headers=self._auth_headers, follow_redirects=False
        )
        response.raise_for_status()
        return [ClientResponse(**item) for item in response.json()]

    async def send_welcome_email(self, email: str, name: str) -> SendEmailResponse:
        """
        Ask the service to send the welcome email.

        A provider failure comes back as status "error" rather than an exception.
        """
        response: Response = await self.client.post(
            "/api/send-email",
            json=SendEmailRequest(email=email, name=name).model_dump(mode="json"),
        )
        if response.status_code not in (200, 500):
            response.raise_for_status()
        return SendEmailResponse(**response.json())

    async def sign_up(self, request: SignUpRequest) -> AuthStatusResponse:
        response: Response = await self.client.post("/api/auth/signup", json=request.model_dump(mode="json"))
        response.raise_for_status()
        return AuthStatusResponse(**response.json())

    async def resend_confirmation(self, email: str) -> AuthStatusResponse:
        response: Response = await self.client.post(
            "/api/auth/resend",
            json=ResendConfirmationRequest(email=email).model_dump(mode="json"),
        )
        response.raise_for_status()
        return AuthStatusResponse(**response.json())

    async def get_view(self, path: str) -> Response:
        """GET a gated path without following redirects, for inspecting the session gate."""
        return await self.client.get(path, headers=self._auth_headers, follow_redirects=False)

    async def get_auth_view(self, path: str) -> ViewResponse:
        response: Response = await self.client.get(path, headers=self._auth_headers)
        response.raise_for_status()
        return ViewResponse(**response.json())

    async def get_dashboard(self) -> DashboardResponse:
        """
        Open the dashboard (starts a fresh intake form for this session).

        Raises:
            httpx.HTTPStatusError: If the request is redirected or fails
        """
        response: Response = await self.client.get(
            "/dashboard", headers=self._auth_headers, follow_redirects=False
        )
        response.raise_for_status()
        return DashboardResponse(**response.json())

    async def submit_intake(self, request: CreateClientRequest) -> SubmissionResponse:
        """
        Submit the intake form.

        Invalid, conflicting, failed and busy submissions are returned as a
        SubmissionResponse with the matching outcome, not raised.
        """
        response: Response = await self.client.post(
            "/dashboard/clients",
            json=request.model_dump(mode="json"),
            headers=self._auth_headers,
            follow_redirects=False,
        )
        if response.status_code not in SUBMISSION_STATUSES:
            response.raise_for_status()
        return SubmissionResponse(**response.json())
