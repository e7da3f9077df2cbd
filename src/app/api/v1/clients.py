from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.services.client_service import ClientService
from src.client.schemas import ClientResponse
from src.app.api.mappers import to_client_response
from src.shared.exceptions import EntityNotFound, StoreUnavailable
from src.app.logging import get_logger

# Read-only: records are only created through the intake workflow (POST /dashboard/clients).
# The session gate keeps these routes behind sign-in.
router = APIRouter(prefix="/clients", tags=["clients"])
logger = get_logger(__name__)


@router.get("/", response_model=list[ClientResponse])
@inject
async def list_clients(
    service: ClientService = Depends(Provide[Container.client_service]),
) -> list[ClientResponse]:
    """List every client, newest first."""
    try:
        clients = await service.list_clients()
    except StoreUnavailable as e:
        logger.error(f"Failed to list clients: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return [to_client_response(client) for client in clients]


@router.get("/{client_id}", response_model=ClientResponse)
@inject
async def get_client(
    client_id: UUID,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> ClientResponse:
    """Get a client by ID."""
    try:
        client = await service.get_client(client_id)
        return to_client_response(client)
    except EntityNotFound as e:
        logger.error(f"Client not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
