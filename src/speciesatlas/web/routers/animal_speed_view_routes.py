"""HTML page for the animal speed chart."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from speciesatlas.animals.chart import DIET_COLORS, X_AXIS_LABEL, Y_AXIS_LABEL
from speciesatlas.animals.ingestion import AnimalSpeedLoader
from speciesatlas.config import AtlasConfig
from speciesatlas.web.core.container import Container

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/animals/speed", response_class=HTMLResponse)
@inject
async def animal_speed_view(
    request: Request,
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[AtlasConfig, Depends(Provide[Container.config])],
    loader: Annotated[AnimalSpeedLoader, Depends(Provide[Container.animal_speed_loader])],
    csv_path: Annotated[str, Depends(Provide[Container.animal_csv_path])],
) -> HTMLResponse:
    """Render the chart page; the image itself is served by the API."""
    records = await loader.load(csv_path)
    return templates.TemplateResponse(
        request,
        "animals/speed.html.j2",
        {
            "config": config,
            "page_title": "Fastest animals",
            "toasts": [],
            "records": records,
            "chart_url": request.url_for("get_animal_speed_chart"),
            "x_label": X_AXIS_LABEL,
            "y_label": Y_AXIS_LABEL,
            "diet_colors": {diet.label: color for diet, color in DIET_COLORS.items()},
        },
    )
