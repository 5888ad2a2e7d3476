"""Species catalogue API routes."""

import logging
from typing import Annotated, Any
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Body, Depends, HTTPException, status

from speciesatlas.species.dialogs import SpeciesDetailsView
from speciesatlas.species.models import SpeciesRecord
from speciesatlas.species.store import SpeciesStore
from speciesatlas.species.submission import SpeciesUpdateService
from speciesatlas.species.validation import validate_species_edit
from speciesatlas.web.core.container import Container
from speciesatlas.web.core.identity import get_session_id
from speciesatlas.web.models.species import (
    SpeciesDetailResponse,
    SpeciesListResponse,
    SpeciesResponse,
    SpeciesUpdateResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/species")


async def _get_or_404(store: SpeciesStore, species_id: UUID) -> SpeciesRecord:
    species = await store.get_species(species_id)
    if species is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Species {species_id} not found",
        )
    return species


@router.get("", response_model=SpeciesListResponse)
@inject
async def list_species(
    store: Annotated[SpeciesStore, Depends(Provide[Container.species_store])],
) -> SpeciesListResponse:
    """List all species in the catalogue."""
    records = await store.list_species()
    return SpeciesListResponse(
        count=len(records),
        species=[SpeciesResponse.model_validate(record) for record in records],
    )


@router.get("/{species_id}", response_model=SpeciesDetailResponse)
@inject
async def get_species(
    species_id: UUID,
    store: Annotated[SpeciesStore, Depends(Provide[Container.species_store])],
    session_id: Annotated[str | None, Depends(get_session_id)],
) -> SpeciesDetailResponse:
    """Return one species and whether the caller may edit it."""
    species = await _get_or_404(store, species_id)
    view = SpeciesDetailsView(species, session_id)
    return SpeciesDetailResponse(
        species=SpeciesResponse.model_validate(species),
        can_edit=view.can_edit,
    )


@router.put("/{species_id}", response_model=SpeciesUpdateResponse)
@inject
async def update_species(
    species_id: UUID,
    payload: Annotated[dict[str, Any], Body()],
    store: Annotated[SpeciesStore, Depends(Provide[Container.species_store])],
    update_service: Annotated[
        SpeciesUpdateService, Depends(Provide[Container.species_update_service])
    ],
    session_id: Annotated[str | None, Depends(get_session_id)],
) -> SpeciesUpdateResponse:
    """Validate and apply an edit to the five editable fields of a species.

    Only the record's author may edit it. Validation errors come back per
    field with status 422; store failures come back with the store's message.
    """
    species = await _get_or_404(store, species_id)
    if not SpeciesDetailsView(species, session_id).can_edit:
        logger.warning("Rejected edit of species %s by non-author", species_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author of this species can edit it",
        )

    validation = validate_species_edit(payload)
    if validation.values is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": validation.errors},
        )

    result = await update_service.submit(species_id, validation.values)
    toasts = update_service.notifications.drain()
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": result.message,
                "toasts": [toast.model_dump(mode="json") for toast in toasts],
            },
        )

    refreshed = await _get_or_404(store, species_id)
    return SpeciesUpdateResponse(species=SpeciesResponse.model_validate(refreshed), toasts=toasts)
