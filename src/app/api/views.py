"""Session-gated views: sign-in, sign-up and the client intake dashboard."""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.domain.models import ClientDraft, SubmissionOutcome
from src.app.core.services.intake_workflow import IntakeWorkflowRegistry
from src.app.api.mappers import to_dashboard_response
from src.client.schemas import (
    CreateClientRequest,
    DashboardResponse,
    SubmissionOutcomeEnum,
    SubmissionResponse,
    ViewResponse,
)
from src.shared.auth.supabase_auth import Session
from src.app.logging import get_logger

router = APIRouter(tags=["views"])
logger = get_logger(__name__)

OUTCOME_STATUS = {
    SubmissionOutcome.CREATED: status.HTTP_201_CREATED,
    SubmissionOutcome.INVALID: 422,
    SubmissionOutcome.CONFLICT: status.HTTP_409_CONFLICT,
    SubmissionOutcome.FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    SubmissionOutcome.BUSY: status.HTTP_429_TOO_MANY_REQUESTS,
}


def current_session(request: Request) -> Session:
    """Session resolved by the session gate middleware."""
    session = getattr(request.state, "session", None)
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not signed in")
    return session


@router.get("/signin", response_model=ViewResponse)
async def signin_view() -> ViewResponse:
    return ViewResponse(view="signin")


@router.get("/signup", response_model=ViewResponse)
async def signup_view() -> ViewResponse:
    return ViewResponse(view="signup")


@router.get("/dashboard", response_model=DashboardResponse)
@inject
async def dashboard(
    session: Session = Depends(current_session),
    registry: IntakeWorkflowRegistry = Depends(Provide[Container.workflow_registry]),
) -> DashboardResponse:
    """Open the intake form with an empty draft and the current client list."""
    workflow = registry.open(session.user_id)
    await workflow.refresh()
    return to_dashboard_response(workflow)


@router.post("/dashboard/clients", response_model=SubmissionResponse)
@inject
async def submit_client(
    request: CreateClientRequest,
    session: Session = Depends(current_session),
    registry: IntakeWorkflowRegistry = Depends(Provide[Container.workflow_registry]),
):
    """
    Submit the intake form.

    Returns the outcome with the resulting form and list:
    201 created, 422 invalid, 409 conflict, 503 store failure, 429 already submitting.
    """
    workflow = registry.get(session.user_id)
    outcome = await workflow.submit(ClientDraft(**request.model_dump()))
    if outcome is SubmissionOutcome.CREATED:
        logger.info(f"Client onboarded by user {session.user_id}")

    snapshot = to_dashboard_response(workflow)
    body = SubmissionResponse(
        outcome=SubmissionOutcomeEnum(outcome.value),
        form=snapshot.form,
        clients=snapshot.clients,
    )
    return JSONResponse(status_code=OUTCOME_STATUS[outcome], content=body.model_dump(mode="json"))
