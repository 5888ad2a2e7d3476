"""Animal speed domain package.

This package contains the animal speed chart pipeline:
- AnimalRecord / Diet: cleaned table rows
- AnimalSpeedLoader: CSV ingestion and ranking
- SpeedChartRenderer: bar chart rendering (matplotlib and plotly)
"""

from speciesatlas.animals.chart import SpeedChartRenderer
from speciesatlas.animals.ingestion import AnimalSpeedLoader
from speciesatlas.animals.models import AnimalRecord, Diet, IngestionResult, RowRejection

__all__ = [
    "AnimalRecord",
    "AnimalSpeedLoader",
    "Diet",
    "IngestionResult",
    "RowRejection",
    "SpeedChartRenderer",
]
