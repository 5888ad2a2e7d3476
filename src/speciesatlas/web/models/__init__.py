"""Web API contract models using Pydantic for validation."""

from speciesatlas.web.models.animals import AnimalSpeedsResponse
from speciesatlas.web.models.species import (
    SpeciesDetailResponse,
    SpeciesListResponse,
    SpeciesResponse,
    SpeciesUpdateResponse,
)

__all__ = [
    "AnimalSpeedsResponse",
    "SpeciesDetailResponse",
    "SpeciesListResponse",
    "SpeciesResponse",
    "SpeciesUpdateResponse",
]
