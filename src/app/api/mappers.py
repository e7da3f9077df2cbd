"""Mappers for converting between domain models and API schemas."""
from src.app.core.domain.models import Client, FormState
from src.app.core.services.intake_workflow import IntakeWorkflow
from src.client.schemas import (
    ClientResponse,
    DashboardResponse,
    FormStateResponse,
)


def to_client_response(client: Client) -> ClientResponse:
    """
    Convert a Client domain model to ClientResponse API schema.

    Args:
        client: Domain model

    Returns:
        API response schema
    """
    return ClientResponse(
        id=client.id,
        name=client.name,
        email=client.email,
        business_name=client.business_name,
        created_at=client.created_at,
    )


def to_form_state_response(form: FormState) -> FormStateResponse:
    return FormStateResponse(
        name=form.draft.name,
        email=form.draft.email,
        business_name=form.draft.business_name,
        errors=dict(form.errors),
        is_submitting=form.is_submitting,
        show_success=form.show_success,
        notice=form.notice,
    )


def to_dashboard_response(workflow: IntakeWorkflow) -> DashboardResponse:
    """Snapshot of a session's form and client list."""
    return DashboardResponse(
        form=to_form_state_response(workflow.form),
        clients=[to_client_response(client) for client in workflow.clients],
    )
