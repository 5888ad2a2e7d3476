"""HTML pages for browsing species and editing the ones you authored."""

import logging
from typing import Annotated
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.status import (
    HTTP_303_SEE_OTHER,
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
)

from speciesatlas.config import AtlasConfig
from speciesatlas.notifications.toast import Toast
from speciesatlas.species.dialogs import EditSpeciesDialog, SpeciesDetailsView, SubmitOutcome
from speciesatlas.species.models import SpeciesRecord
from speciesatlas.species.store import SpeciesStore
from speciesatlas.species.submission import SAVED_TOAST, SpeciesUpdateService
from speciesatlas.web.core.container import Container
from speciesatlas.web.core.identity import get_session_id

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_or_404(store: SpeciesStore, species_id: UUID) -> SpeciesRecord:
    species = await store.get_species(species_id)
    if species is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Species not found")
    return species


def _render_details(
    request: Request,
    templates: Jinja2Templates,
    config: AtlasConfig,
    view: SpeciesDetailsView,
    dialog: EditSpeciesDialog | None,
    toasts: list[Toast],
    status_code: int = 200,
) -> Response:
    return templates.TemplateResponse(
        request,
        "species/detail.html.j2",
        {
            "config": config,
            "page_title": view.title,
            "toasts": toasts,
            "view": view,
            "dialog": dialog,
        },
        status_code=status_code,
    )


@router.get("/species", response_class=HTMLResponse)
@inject
async def species_list_view(
    request: Request,
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[AtlasConfig, Depends(Provide[Container.config])],
    store: Annotated[SpeciesStore, Depends(Provide[Container.species_store])],
) -> HTMLResponse:
    """Render the catalogue."""
    species = await store.list_species()
    return templates.TemplateResponse(
        request,
        "species/list.html.j2",
        {
            "config": config,
            "page_title": "Species",
            "toasts": [],
            "species": species,
        },
    )


@router.get("/species/{species_id}", response_class=HTMLResponse)
@inject
async def species_detail_view(
    request: Request,
    species_id: UUID,
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[AtlasConfig, Depends(Provide[Container.config])],
    store: Annotated[SpeciesStore, Depends(Provide[Container.species_store])],
    update_service: Annotated[
        SpeciesUpdateService, Depends(Provide[Container.species_update_service])
    ],
    session_id: Annotated[str | None, Depends(get_session_id)],
    toast: str | None = None,
) -> Response:
    """Render one species; its author also gets the edit form."""
    species = await _get_or_404(store, species_id)
    view = SpeciesDetailsView(species, session_id)

    dialog = None
    if view.can_edit:
        dialog = EditSpeciesDialog(species, update_service)
        dialog.open()

    toasts = [SAVED_TOAST] if toast == "saved" else []
    return _render_details(request, templates, config, view, dialog, toasts)


@router.post("/species/{species_id}/edit", response_class=HTMLResponse)
@inject
async def species_edit_submit(
    request: Request,
    species_id: UUID,
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[AtlasConfig, Depends(Provide[Container.config])],
    store: Annotated[SpeciesStore, Depends(Provide[Container.species_store])],
    update_service: Annotated[
        SpeciesUpdateService, Depends(Provide[Container.species_update_service])
    ],
    session_id: Annotated[str | None, Depends(get_session_id)],
) -> Response:
    """Handle the Save button of the edit form.

    A successful save redirects back to the details page, which re-reads the
    record. Anything else re-renders the form with its errors and toasts.
    """
    species = await _get_or_404(store, species_id)
    view = SpeciesDetailsView(species, session_id)
    if not view.can_edit:
        logger.warning("Rejected form edit of species %s by non-author", species_id)
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail="Only the author of this species can edit it",
        )

    form_data = await request.form()
    dialog = EditSpeciesDialog(species, update_service)
    dialog.open()
    outcome = await dialog.submit(form_data)

    if outcome is SubmitOutcome.SAVED:
        update_service.notifications.drain()
        return RedirectResponse(
            url=f"/species/{species_id}?toast=saved", status_code=HTTP_303_SEE_OTHER
        )

    toasts: list[Toast] = update_service.notifications.drain()
    status_code = (
        HTTP_422_UNPROCESSABLE_ENTITY if outcome is SubmitOutcome.INVALID else HTTP_400_BAD_REQUEST
    )
    return _render_details(request, templates, config, view, dialog, toasts, status_code)
