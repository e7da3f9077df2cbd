"""API schemas for the onboarding service requests and responses."""
from datetime import datetime
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class CreateClientRequest(BaseModel):
    """
    Request schema for creating a client record or submitting the intake form.

    Fields are plain strings: the intake workflow validates them itself and
    reports failures per field instead of rejecting the request.
    """
    name: str = ""
    email: str = ""
    business_name: str = ""


class ClientResponse(BaseModel):
    """Response schema for client data returned by the API."""
    id: UUID
    name: str
    email: str
    business_name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SendEmailRequest(BaseModel):
    """Request schema for POST /api/send-email."""
    email: str
    name: str


class SendEmailResponse(BaseModel):
    """Response schema for POST /api/send-email."""
    status: Literal["success", "error"]
    error: str | None = None


class SignUpRequest(BaseModel):
    """Request schema for operator sign-up."""
    email: EmailStr = Field(..., description="Operator email address")
    password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., min_length=1)


class ResendConfirmationRequest(BaseModel):
    """Request schema for re-sending the sign-up confirmation email."""
    email: EmailStr


class AuthStatusResponse(BaseModel):
    """Response schema for sign-up and resend-confirmation."""
    status: Literal["confirmation_sent"] = "confirmation_sent"
    email: str


class ViewResponse(BaseModel):
    """Descriptor of a rendered view."""
    view: str


class SubmissionOutcomeEnum(str, Enum):
    """Outcome of an intake submission."""
    CREATED = "created"
    INVALID = "invalid"
    CONFLICT = "conflict"
    FAILED = "failed"
    BUSY = "busy"


class FormStateResponse(BaseModel):
    """Intake form state as shown to the operator."""
    name: str
    email: str
    business_name: str
    errors: dict[str, str] = Field(default_factory=dict, description="Field name -> message")
    is_submitting: bool = False
    show_success: bool = False
    notice: str | None = None


class DashboardResponse(BaseModel):
    """Response schema for the dashboard view."""
    form: FormStateResponse
    clients: list[ClientResponse]


class SubmissionResponse(DashboardResponse):
    """Response schema for an intake submission."""
    outcome: SubmissionOutcomeEnum
