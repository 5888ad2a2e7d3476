"""Loading and ranking of the animal speed table.

The table is a CSV resource with at least ``name``, ``speed`` and ``diet``
columns. Rows that do not describe a usable animal are dropped whole, the
survivors are ranked fastest first and cut down to the top N.
"""

import asyncio
import io
import logging
import math
from collections.abc import Mapping
from operator import attrgetter
from pathlib import Path

import httpx
import pandas as pd

from speciesatlas.animals.models import AnimalRecord, Diet, IngestionResult, RowRejection

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("name", "speed", "diet")
DEFAULT_TOP_N = 15


def coerce_speed(raw: object) -> float | None:
    """Convert a raw cell to a finite float, or None when it is not one.

    A present but blank cell reads as 0. An absent cell (None or NaN from a
    short row or a missing column) has no value at all.
    """
    if raw is None or pd.isna(raw):
        return None
    text = str(raw).strip()
    if not text:
        return 0.0
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _cell(row: Mapping[str, object], column: str) -> str:
    """Text of a cell; short rows leave the missing cells unset."""
    value = row.get(column)
    if value is None or pd.isna(value):
        return ""
    return str(value)


def clean_row(row: Mapping[str, object]) -> AnimalRecord | str:
    """Turn one parsed CSV row into a record, or return the reason it was rejected."""
    name = _cell(row, "name").strip()
    diet_raw = _cell(row, "diet").strip().lower()
    speed = coerce_speed(row.get("speed"))

    if not name:
        return "empty name"
    if speed is None:
        return f"speed {row.get('speed')!r} is not a finite number"
    try:
        diet = Diet(diet_raw)
    except ValueError:
        return f"unknown diet {diet_raw!r}"
    return AnimalRecord(name=name, speed=speed, diet=diet)


def rank_records(records: list[AnimalRecord], top_n: int = DEFAULT_TOP_N) -> list[AnimalRecord]:
    """Sort fastest first, keeping file order among equal speeds, and keep ``top_n``."""
    return sorted(records, key=attrgetter("speed"), reverse=True)[:top_n]


class AnimalSpeedLoader:
    """Fetches the animal CSV and produces the ranked record list for the chart."""

    def __init__(
        self,
        top_n: int = DEFAULT_TOP_N,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the loader.

        Args:
            top_n: Maximum number of records returned
            http_client: Client used for URL resources; a short-lived one is
                created per call when omitted
            timeout: Request timeout in seconds for the short-lived client
        """
        self.top_n = top_n
        self.http_client = http_client
        self.timeout = timeout

    async def load(self, resource: str | Path) -> list[AnimalRecord]:
        """Load, clean and rank the animals in ``resource``.

        Never raises for an unreadable resource; the failure is logged and an
        empty list is returned so the chart simply renders nothing.
        """
        result = await self.load_with_report(resource)
        return result.records

    async def load_with_report(self, resource: str | Path) -> IngestionResult:
        """Same as ``load`` but also reports which rows were dropped and why."""
        try:
            text = await self._read_resource(resource)
            result = self.parse(text)
        except (OSError, UnicodeDecodeError, httpx.HTTPError) as e:
            logger.error("Failed to fetch animal data from %s: %s", resource, e)
            return IngestionResult(failed=True)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error("Failed to parse animal data from %s: %s", resource, e)
            return IngestionResult(failed=True)

        if result.rejections:
            logger.debug(
                "Dropped %d of %d animal rows from %s",
                result.rejected_count,
                result.total_rows,
                resource,
            )
        return result

    def parse(self, text: str) -> IngestionResult:
        """Parse CSV text into a ranked result.

        Raises:
            pandas.errors.EmptyDataError: If the text holds no header row
            pandas.errors.ParserError: If the text is not valid CSV
        """
        width = len(pd.read_csv(io.StringIO(text), nrows=0).columns)
        # Surplus trailing fields are cut off, never shifted into an index
        frame = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            engine="python",
            on_bad_lines=lambda fields: fields[:width],
        )

        missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
        if missing:
            logger.warning("Animal data is missing required columns: %s", ", ".join(missing))

        records: list[AnimalRecord] = []
        rejections: list[RowRejection] = []
        for row_number, row in enumerate(frame.to_dict("records"), start=1):
            cleaned = clean_row(row)
            if isinstance(cleaned, AnimalRecord):
                records.append(cleaned)
            else:
                rejections.append(RowRejection(row_number=row_number, reason=cleaned))

        return IngestionResult(
            records=rank_records(records, self.top_n),
            rejections=rejections,
            total_rows=len(frame),
        )

    async def _read_resource(self, resource: str | Path) -> str:
        """Read the raw CSV text from a URL or a local path."""
        location = str(resource)
        if location.startswith(("http://", "https://")):
            if self.http_client is not None:
                return await self._fetch(self.http_client, location)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await self._fetch(client, location)

        return await asyncio.to_thread(Path(location).read_text, encoding="utf-8-sig")

    @staticmethod
    async def _fetch(client: httpx.AsyncClient, url: str) -> str:
        response = await client.get(url)
        response.raise_for_status()
        return response.text
