"""Operator sign-up endpoints, delegated to the session collaborator."""
from fastapi import APIRouter, Depends, HTTPException, status
from dependency_injector.wiring import Provide, inject

from src.app.config import Settings
from src.app.containers import Container
from src.client.schemas import AuthStatusResponse, ResendConfirmationRequest, SignUpRequest
from src.shared.auth.supabase_auth import AuthError, SessionProvider
from src.app.logging import get_logger

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


def check_password(password: str, confirm_password: str, min_length: int) -> str | None:
    """Return the sign-up error for a password pair, or None if acceptable."""
    if password != confirm_password:
        return "Passwords do not match"
    if len(password) < min_length:
        return f"Password must be at least {min_length} characters"
    return None


@router.post("/signup", response_model=AuthStatusResponse, status_code=status.HTTP_201_CREATED)
@inject
async def sign_up(
    request: SignUpRequest,
    provider: SessionProvider = Depends(Provide[Container.session_provider]),
    config: Settings = Depends(Provide[Container.config]),
) -> AuthStatusResponse:
    """Register an operator; the auth provider emails a confirmation link."""
    error = check_password(request.password, request.confirm_password, config.auth.min_password_length)
    if error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)

    try:
        await provider.sign_up(request.email, request.password)
    except AuthError as e:
        logger.error(f"Sign up failed for {request.email}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AuthStatusResponse(email=request.email)


@router.post("/resend", response_model=AuthStatusResponse)
@inject
async def resend_confirmation(
    request: ResendConfirmationRequest,
    provider: SessionProvider = Depends(Provide[Container.session_provider]),
) -> AuthStatusResponse:
    """Send the sign-up confirmation email again."""
    try:
        await provider.resend_confirmation(request.email)
    except AuthError as e:
        logger.error(f"Failed to resend verification email to {request.email}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AuthStatusResponse(email=request.email)
