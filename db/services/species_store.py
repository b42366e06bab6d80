# db/services/species_store.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from sqlalchemy import update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import Species

logger = logging.getLogger(__name__)

# Everything a card may write; species_id and author are never touched.
EDITABLE_FIELDS: tuple[str, ...] = (
    "scientific_name",
    "common_name",
    "kingdom",
    "total_population",
    "description",
    "image",
)


@dataclass(frozen=True)
class StoreError:
    message: str


@dataclass(frozen=True)
class StoreResult:
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SpeciesStore(Protocol):
    def update_species(
        self, species_id: int, values: Mapping[str, Any]
    ) -> StoreResult: ...


def _error_message(exc: Exception) -> str:
    # Prefer the driver's own wording ("duplicate key value ...", "UNIQUE constraint failed ...")
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc)


class SqlSpeciesStore:
    """Update-by-identifier against the ``species`` table."""

    def __init__(self, db: Session):
        self.db = db

    def update_species(
        self, species_id: int, values: Mapping[str, Any]
    ) -> StoreResult:
        unknown = set(values) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")

        stmt = (
            update(Species)
            .where(Species.species_id == species_id)
            .values(**dict(values))
            .execution_options(synchronize_session=False)
        )
        # drivers raise OverflowError while binding out-of-range integers
        try:
            self.db.execute(stmt)
            self.db.commit()
        except (SQLAlchemyError, OverflowError) as e:
            self.db.rollback()
            msg = _error_message(e)
            logger.warning("update of species %s failed: %s", species_id, msg)
            return StoreResult(error=StoreError(msg))

        logger.info("updated species %s", species_id)
        return StoreResult()
