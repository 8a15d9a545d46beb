"""
Record store par proprietaire / Owner-scoped record store.

CRUD asynchrone sur un modele ORM, toujours filtre par proprietaire.
Async CRUD over one ORM model, always filtered by owner.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fuel_tracker.config import settings
from fuel_tracker.exceptions import PersistenceError, RecordNotFoundError, UnauthenticatedError
from fuel_tracker.models.vehicle import Vehicle

logger = logging.getLogger("fuel_tracker.record_store")


class RecordStore:
    """Acces aux enregistrements d'un proprietaire / Access to one owner's records."""

    def __init__(self, db: AsyncSession, model: type, owner_id: int | None):
        self.db = db
        self.model = model
        self.owner_id = owner_id

    @property
    def entity(self) -> str:
        return self.model.__name__

    def _owner(self) -> int:
        if self.owner_id is None:
            raise UnauthenticatedError("No authenticated owner")
        return self.owner_id

    async def _run(self, action: str, operation):
        try:
            return await operation()
        except SQLAlchemyError as exc:
            logger.exception("%s %s failed", self.entity, action)
            raise PersistenceError(f"Could not {action} {self.entity}") from exc

    async def _fetch(self, record_id: int) -> Any | None:
        query = (
            select(self.model)
            .where(self.model.id == record_id, self.model.owner_id == self._owner())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.unique().scalar_one_or_none()

    async def get(self, record_id: int) -> Any | None:
        """Lire un enregistrement / Read one record, None if absent."""
        self._owner()
        return await self._run("read", lambda: self._fetch(record_id))

    async def list(self, *order_by, **filters) -> list[Any]:
        """Lister avec filtres d'egalite / List with equality filters."""
        owner_id = self._owner()

        async def operation():
            query = select(self.model).where(self.model.owner_id == owner_id)
            for column, value in filters.items():
                if value is not None:
                    query = query.where(getattr(self.model, column) == value)
            query = query.order_by(*order_by).limit(settings.LIST_LIMIT)
            result = await self.db.execute(query)
            return list(result.unique().scalars().all())

        return await self._run("list", operation)

    async def create(self, fields: dict[str, Any]) -> Any:
        """Creer / Create a record for the current owner."""
        owner_id = self._owner()

        async def operation():
            record = self.model(**fields, owner_id=owner_id)
            self.db.add(record)
            await self.db.flush()
            return await self._fetch(record.id)

        record = await self._run("create", operation)
        logger.info("%s %s created for owner %s", self.entity, record.id, owner_id)
        return record

    async def update(self, record_id: int, fields: dict[str, Any]) -> Any:
        """Mise a jour partielle / Partial update."""
        self._owner()

        async def operation():
            record = await self._fetch(record_id)
            if record is None:
                raise RecordNotFoundError(self.entity, record_id)
            for key, value in fields.items():
                setattr(record, key, value)
            await self.db.flush()
            return await self._fetch(record_id)

        return await self._run("update", operation)

    async def delete(self, record_id: int) -> None:
        """Supprimer / Delete a record."""
        self._owner()

        async def operation():
            record = await self._fetch(record_id)
            if record is None:
                raise RecordNotFoundError(self.entity, record_id)
            await self.db.delete(record)
            await self.db.flush()

        await self._run("delete", operation)
        logger.info("%s %s deleted", self.entity, record_id)


async def find_vehicle(db: AsyncSession, owner_id: int | None, vehicle_id: int) -> Vehicle | None:
    """Recherche d'un vehicule du proprietaire / Owner's vehicle lookup."""
    return await RecordStore(db, Vehicle, owner_id).get(vehicle_id)
