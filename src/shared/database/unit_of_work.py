from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.database import Database
from src.shared.database.mapping import EntityMapper


class UnitOfWork:
    """
    Groups writes into a single transaction.

    Commits when the block exits cleanly, rolls back when it raises. A failing
    commit (e.g. a constraint violation) is rolled back and re-raised to the caller.
    """

    def __init__(
        self,
        db: Database,
        entity_mapper: EntityMapper,
    ) -> None:
        self.db = db
        self.session: AsyncSession | None = None
        self.entity_mapper = entity_mapper

    async def __aenter__(self):
        self.session = self.db.session_maker()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            if self.session:
                await self.session.close()
                self.session = None

    def _map_to_entity(self, model_instance: Any):
        return self.entity_mapper.map_to_entity(model_instance)

    def add(self, model_instance: Any):
        if self.session is None:
            raise RuntimeError("UnitOfWork used outside of 'async with'")
        entity = self._map_to_entity(model_instance)
        self.session.add(entity)

    async def commit(self):
        try:
            await self.session.commit()
        except Exception:
            await self.rollback()
            raise

    async def rollback(self):
        await self.session.rollback()
