"""Species catalogue API contract models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from speciesatlas.notifications.toast import Toast
from speciesatlas.species.models import Kingdom


class SpeciesResponse(BaseModel):
    """A species as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    scientific_name: str
    common_name: str | None = None
    kingdom: Kingdom
    total_population: int | None = None
    description: str | None = None
    author: str


class SpeciesListResponse(BaseModel):
    """All catalogue entries."""

    count: int
    species: list[SpeciesResponse]


class SpeciesDetailResponse(BaseModel):
    """One species plus whether the caller may edit it."""

    species: SpeciesResponse
    can_edit: bool = Field(..., description="True when the caller is the record's author")


class SpeciesUpdateResponse(BaseModel):
    """Result of a successful update; the species is re-read from the store."""

    species: SpeciesResponse
    toasts: list[Toast] = Field(default_factory=list)
