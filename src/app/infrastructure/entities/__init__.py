"""Database entities for the infrastructure layer."""
from src.app.infrastructure.entities.client_entity import ClientEntity

__all__ = [
    "ClientEntity",
]
