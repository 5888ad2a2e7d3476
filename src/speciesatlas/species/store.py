"""Persistence access for species records."""

import logging
import uuid

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select

from speciesatlas.database.core import DatabaseService
from speciesatlas.species.models import SpeciesRecord
from speciesatlas.species.validation import SpeciesEditValues

logger = logging.getLogger(__name__)


class SpeciesStoreError(Exception):
    """Raised when the store rejects an operation; ``message`` is user-presentable."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _integrity_message(error: IntegrityError) -> str:
    """Extract the driver's message from an integrity error."""
    return str(error.orig) if error.orig is not None else str(error)


class SpeciesStore:
    """Reads and writes ``species`` rows through the async database service."""

    def __init__(self, database_service: DatabaseService) -> None:
        self.database_service = database_service

    async def get_species(self, species_id: uuid.UUID) -> SpeciesRecord | None:
        """Fetch one species by id, or None if it does not exist."""
        async with self.database_service.get_async_db() as session:
            return await session.get(SpeciesRecord, species_id)

    async def list_species(self) -> list[SpeciesRecord]:
        """All species ordered by scientific name."""
        async with self.database_service.get_async_db() as session:
            result = await session.execute(
                select(SpeciesRecord).order_by(SpeciesRecord.scientific_name)  # type: ignore[arg-type]
            )
            return list(result.scalars().all())

    async def create_species(self, record: SpeciesRecord) -> SpeciesRecord:
        """Insert a new species.

        Raises:
            SpeciesStoreError: If the insert violates a constraint or fails
        """
        async with self.database_service.get_async_db() as session:
            try:
                session.add(record)
                await session.commit()
                await session.refresh(record)
            except IntegrityError as e:
                await session.rollback()
                raise SpeciesStoreError(_integrity_message(e)) from e
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Failed to create species %s: %s", record.scientific_name, e)
                raise SpeciesStoreError(str(e)) from e
        logger.info("Created species %s (%s)", record.scientific_name, record.id)
        return record

    async def update_species(self, species_id: uuid.UUID, values: SpeciesEditValues) -> None:
        """Replace the five editable fields of one species in a single UPDATE.

        Raises:
            SpeciesStoreError: If no row matched, a constraint failed, or the
                database could not be reached
        """
        statement = (
            update(SpeciesRecord)
            .where(SpeciesRecord.id == species_id)  # type: ignore[arg-type]
            .values(**values.model_dump())
        )
        async with self.database_service.get_async_db() as session:
            try:
                result = await session.execute(statement)
                if result.rowcount == 0:  # type: ignore[attr-defined]
                    await session.rollback()
                    raise SpeciesStoreError(f"Species {species_id} not found")
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise SpeciesStoreError(_integrity_message(e)) from e
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Failed to update species %s: %s", species_id, e)
                raise SpeciesStoreError(str(e)) from e
        logger.info("Updated species %s", species_id)
