"""Data models for the animal speed domain."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Diet(str, Enum):
    """What an animal eats; drives the bar colour in the speed chart."""

    CARNIVORE = "carnivore"
    HERBIVORE = "herbivore"
    OMNIVORE = "omnivore"

    @property
    def label(self) -> str:
        """Capitalized label used in legends."""
        return self.value.capitalize()


class AnimalRecord(BaseModel):
    """One cleaned row of the animal speed table."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    speed: float = Field(allow_inf_nan=False)  # km/h
    diet: Diet


class RowRejection(BaseModel):
    """Why a CSV row did not make it into the ranked list."""

    model_config = ConfigDict(frozen=True)

    row_number: int  # 1-based, header excluded
    reason: str


class IngestionResult(BaseModel):
    """Ranked records plus diagnostics about the rows that were dropped."""

    records: list[AnimalRecord] = Field(default_factory=list)
    rejections: list[RowRejection] = Field(default_factory=list)
    total_rows: int = 0
    failed: bool = False  # True when the resource could not be fetched or parsed

    @property
    def rejected_count(self) -> int:
        """Number of rows dropped by validation."""
        return len(self.rejections)
