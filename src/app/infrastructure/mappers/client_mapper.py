from src.shared.database.mapping import BaseEntityMapper
from src.app.core.domain.models import Client
from src.app.infrastructure.entities.client_entity import ClientEntity


class ClientMapper(BaseEntityMapper[Client, ClientEntity]):
    """Mapper for converting between Client domain model and ClientEntity."""

    @staticmethod
    def to_entity(model_instance: Client) -> ClientEntity:
        """Convert a Client (domain model) to ClientEntity (database entity)."""
        return ClientEntity(
            id=model_instance.id,
            name=model_instance.name,
            email=model_instance.email,
            business_name=model_instance.business_name,
            created_at=model_instance.created_at,
        )

    @staticmethod
    def to_model(entity: ClientEntity) -> Client:
        """Convert a ClientEntity (database entity) to Client (domain model)."""
        return Client(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            business_name=entity.business_name,
            created_at=entity.created_at,
        )
