"""Domain models used in business logic."""
import uuid
from datetime import datetime, UTC
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class Client(BaseModel):
    """Domain model for Client used in business logic."""
    id: UUID = Field(default_factory=uuid.uuid4, description="Unique client ID")
    name: str = Field(..., min_length=1, description="Display name cannot be blank")
    email: str = Field(..., min_length=1, description="Email address, unique across clients")
    business_name: str = Field(..., min_length=1, description="Business name, unique across clients")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Creation timestamp")

    model_config = {"from_attributes": True}


class ClientDraft(BaseModel):
    """
    Unsaved client as entered on the intake form.

    Every field defaults to an empty string so an untouched form is a valid
    draft; whether it is acceptable is decided by the validation engine, not here.
    """
    name: str = ""
    email: str = ""
    business_name: str = ""

    def trimmed(self) -> "ClientDraft":
        """Return a copy with surrounding whitespace removed from every field."""
        return ClientDraft(
            name=self.name.strip(),
            email=self.email.strip(),
            business_name=self.business_name.strip(),
        )


ErrorMap = dict[str, str]


class WorkflowState(StrEnum):
    """Where the intake workflow is in handling a submission."""
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class SubmissionOutcome(StrEnum):
    """How a single submit() call resolved."""
    CREATED = "created"
    INVALID = "invalid"
    CONFLICT = "conflict"
    FAILED = "failed"
    BUSY = "busy"


class NotificationStatus(StrEnum):
    """Result of the welcome email fired after a successful create."""
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class FormState(BaseModel):
    """Transient per-session state of the intake form."""
    draft: ClientDraft = Field(default_factory=ClientDraft)
    errors: ErrorMap = Field(default_factory=dict, description="Field name -> message; absent key means valid")
    is_submitting: bool = False
    show_success: bool = False
    notice: str | None = Field(default=None, description="Non field-scoped message, e.g. a store failure")

    def reset(self) -> None:
        """Clear the draft and any messages after a successful submission."""
        self.draft = ClientDraft()
        self.errors = {}
        self.notice = None
