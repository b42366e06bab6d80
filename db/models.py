from __future__ import annotations

from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .mixins import TimeStampMixin
from .sqltypes import KingdomType

# SQLite only autoincrements INTEGER PRIMARY KEY columns
ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Species(TimeStampMixin, Base):
    __tablename__ = "species"

    species_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True)

    scientific_name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    common_name: Mapped[Optional[str]] = mapped_column(String)
    kingdom: Mapped[str] = mapped_column(KingdomType, nullable=False)
    total_population: Mapped[Optional[int]] = mapped_column(BigInteger)
    image: Mapped[Optional[str]] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Session identity of the owner
    author: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "total_population IS NULL OR total_population >= 1",
            name="ck_species_total_population_positive",
        ),
        Index("ix_species_author", "author"),
    )

    def __repr__(self):
        return f"<Species(species_id={self.species_id}, scientific_name={self.scientific_name}, kingdom={self.kingdom})>"
