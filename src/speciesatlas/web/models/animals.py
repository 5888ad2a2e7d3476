"""Animal speed API contract models."""

from pydantic import BaseModel, Field

from speciesatlas.animals.models import AnimalRecord


class AnimalSpeedsResponse(BaseModel):
    """Ranked animals shown in the speed chart."""

    count: int = Field(..., description="Number of animals returned")
    animals: list[AnimalRecord] = Field(..., description="Animals, fastest first")
    rejected_rows: int = Field(0, description="Rows dropped while cleaning the table")
    total_rows: int = Field(0, description="Data rows read from the table")
