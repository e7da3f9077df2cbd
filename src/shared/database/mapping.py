import abc
from typing import Any, Callable, Generic, TypeVar


TModel = TypeVar("TModel")
TEntity = TypeVar("TEntity")


class BaseEntityMapper(abc.ABC, Generic[TModel, TEntity]):

    @staticmethod
    @abc.abstractmethod
    def to_entity(model_instance: TModel) -> TEntity:
        pass

    @staticmethod
    @abc.abstractmethod
    def to_model(entity: TEntity) -> TModel:
        pass


class EntityMapper:
    """Routes a domain model to the to_entity function registered for its type."""

    def __init__(self, entity_mappings: dict[type, Callable[[Any], Any]]):
        self.entity_mappings = entity_mappings

    def map_to_entity(self, model_instance: Any):
        to_entity = self.entity_mappings.get(type(model_instance))
        if to_entity is None:
            raise ValueError(f"No entity mapping found for model type: {type(model_instance)}")
        return to_entity(model_instance)
