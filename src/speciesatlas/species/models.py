"""Database models for the species catalogue."""

import uuid
from enum import Enum

from sqlalchemy import BigInteger, Column, String, Text
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel


class Kingdom(str, Enum):
    """Top-level taxonomic kingdoms accepted by the catalogue."""

    ANIMALIA = "Animalia"
    PLANTAE = "Plantae"
    FUNGI = "Fungi"
    PROTISTA = "Protista"
    ARCHAEA = "Archaea"
    BACTERIA = "Bacteria"


EDITABLE_FIELDS = (
    "scientific_name",
    "common_name",
    "kingdom",
    "total_population",
    "description",
)


class SpeciesRecord(SQLModel, table=True):
    """Represents a species entry in the catalogue."""

    __tablename__: str = "species"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    scientific_name: str = Field(sa_column=Column(String(200), unique=True, nullable=False))
    common_name: str | None = Field(default=None, sa_column=Column(String(200)))
    kingdom: Kingdom = Field(
        sa_column=Column(
            SAEnum(
                Kingdom,
                native_enum=False,
                length=16,
                values_callable=lambda kingdoms: [k.value for k in kingdoms],
            ),
            nullable=False,
        )
    )
    total_population: int | None = Field(default=None, sa_column=Column(BigInteger))
    description: str | None = Field(default=None, sa_column=Column(Text))
    author: str = Field(index=True)  # Identifier of the owning user

    def get_display_name(self) -> str:
        """Get the best available species display name."""
        return str(self.common_name or self.scientific_name)
