from src.client.onboarding_client import OnboardingClient
from src.client.schemas import (
    ClientResponse,
    CreateClientRequest,
    DashboardResponse,
    SignUpRequest,
    SubmissionOutcomeEnum,
    SubmissionResponse,
)

__all__ = [
    "OnboardingClient",
    "ClientResponse",
    "CreateClientRequest",
    "DashboardResponse",
    "SignUpRequest",
    "SubmissionOutcomeEnum",
    "SubmissionResponse",
]
