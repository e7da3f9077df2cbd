import logging
from uuid import UUID, uuid4
from datetime import datetime, UTC

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.app.core.domain.models import Client, ClientDraft
from src.shared.database.constraint_errors import UNIQUE_VIOLATION, constraint_code, constraint_message
from src.shared.database.unit_of_work import UnitOfWork
from src.app.infrastructure.client_repository import ClientRepository
from src.shared.exceptions import EntityNotFound, ConflictingEntityFound, StoreError, StoreUnavailable

logger = logging.getLogger(__name__)

# Unique columns in the order they are looked for in a violation message
UNIQUE_FIELDS = ("email", "business_name")


def classify_store_error(code: str | None, message: str, client: Client) -> Exception:
    """
    Turn a rejected insert into the matching domain error.

    The store only reports that *a* unique constraint was violated. The
    offending field is recovered by looking for its name in the message, so
    this relies on constraint names containing the column name.

    Args:
        code: SQLSTATE-style error code, if any
        message: Store error message
        client: The client whose insert was rejected

    Returns:
        ConflictingEntityFound for a recognised uniqueness violation, StoreError otherwise.
    """
    if code == UNIQUE_VIOLATION:
        for field in UNIQUE_FIELDS:
            if field in message:
                return ConflictingEntityFound("Client", field, getattr(client, field))
    return StoreError(message)


class ClientService:
    """Service for handling Client business logic."""

    def __init__(self, repository: ClientRepository, unit_of_work: UnitOfWork):
        self.repository = repository
        self.unit_of_work = unit_of_work

    async def create_client(self, draft: ClientDraft) -> Client:
        """
        Create a new client.

        Raises:
            ConflictingEntityFound: email or business name is already taken
            StoreError: the insert failed for any other reason
        """
        # Create domain model with generated ID and timestamp
        client = Client(
            id=uuid4(),
            name=draft.name,
            email=draft.email,
            business_name=draft.business_name,
            created_at=datetime.now(UTC),
        )

        # Persist using unit of work - database enforces email and business name uniqueness
        try:
            async with self.unit_of_work:
                self.unit_of_work.add(client)
        except IntegrityError as e:
            raise classify_store_error(constraint_code(e), constraint_message(e), client) from e
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to insert client %s: %s", client.email, e)
            raise StoreError(str(e)) from e

        logger.info("Created client %s (%s)", client.id, client.business_name)
        return client

    async def list_clients(self) -> list[Client]:
        """
        Get every client, newest first.

        Raises:
            StoreUnavailable: the store could not be reached or queried
        """
        try:
            return await self.repository.list_newest_first()
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"Failed to list clients: {e}") from e

    async def get_client(self, client_id: UUID) -> Client:
        """Get a client by ID."""
        client = await self.repository.get_by_id(client_id)
        if not client:
            raise EntityNotFound("Client", client_id)
        return client
