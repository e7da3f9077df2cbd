"""Welcome email endpoint."""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.services.notification import NotificationError, WelcomeNotifier
from src.client.schemas import SendEmailRequest, SendEmailResponse
from src.app.logging import get_logger

router = APIRouter(tags=["email"])
logger = get_logger(__name__)


@router.post("/send-email", response_model=SendEmailResponse)
@inject
async def send_email(
    request: SendEmailRequest,
    notifier: WelcomeNotifier = Depends(Provide[Container.welcome_notifier]),
):
    """
    Send the welcome email to a client.

    Returns:
        200 {"status": "success"} once the provider accepts the message,
        500 {"status": "error", "error": "..."} otherwise.
    """
    try:
        await notifier.notify(request.email, request.name)
    except NotificationError as e:
        logger.error(f"Failed to send welcome email to {request.email}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=SendEmailResponse(status="error", error=str(e)).model_dump(),
        )
    return SendEmailResponse(status="success")
