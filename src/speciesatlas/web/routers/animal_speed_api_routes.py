"""Animal speed API routes: ranked data, PNG chart and plotly figure."""

import json
import logging
from typing import Annotated, Any

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from speciesatlas.animals.chart import SpeedChartRenderer
from speciesatlas.animals.ingestion import AnimalSpeedLoader
from speciesatlas.web.core.container import Container
from speciesatlas.web.models.animals import AnimalSpeedsResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/animals")


@router.get("/speeds", response_model=AnimalSpeedsResponse)
@inject
async def get_animal_speeds(
    loader: Annotated[AnimalSpeedLoader, Depends(Provide[Container.animal_speed_loader])],
    csv_path: Annotated[str, Depends(Provide[Container.animal_csv_path])],
) -> AnimalSpeedsResponse:
    """Return the fastest animals, ranked, as shown in the chart."""
    result = await loader.load_with_report(csv_path)
    return AnimalSpeedsResponse(
        count=len(result.records),
        animals=result.records,
        rejected_rows=result.rejected_count,
        total_rows=result.total_rows,
    )


@router.get("/speeds/chart.png")
@inject
async def get_animal_speed_chart(
    loader: Annotated[AnimalSpeedLoader, Depends(Provide[Container.animal_speed_loader])],
    renderer: Annotated[SpeedChartRenderer, Depends(Provide[Container.speed_chart_renderer])],
    csv_path: Annotated[str, Depends(Provide[Container.animal_csv_path])],
    width: Annotated[int | None, Query(ge=1, le=4000)] = None,
    height: Annotated[int | None, Query(ge=1, le=4000)] = None,
) -> StreamingResponse:
    """Render the speed chart as a PNG image."""
    records = await loader.load(csv_path)
    buf = renderer.render_png(records, width=width, height=height)
    return StreamingResponse(buf, media_type="image/png")


@router.get("/speeds/figure")
@inject
async def get_animal_speed_figure(
    loader: Annotated[AnimalSpeedLoader, Depends(Provide[Container.animal_speed_loader])],
    renderer: Annotated[SpeedChartRenderer, Depends(Provide[Container.speed_chart_renderer])],
    csv_path: Annotated[str, Depends(Provide[Container.animal_csv_path])],
) -> dict[str, Any]:
    """Return the speed chart as plotly figure JSON for client-side rendering."""
    records = await loader.load(csv_path)
    figure = renderer.build_plotly_figure(records)
    return json.loads(figure.to_json())
