"""Validation of species edit input.

Raw form input is checked as a whole: every field is validated in one pass
and all failures are reported, keyed by field name, so each offending control
can be highlighted at once.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from speciesatlas.species.models import Kingdom


def _blank_to_none(value: Any) -> Any:
    """Map None/blank text to None and trim everything else."""
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    return value


class SpeciesEditValues(BaseModel):
    """Normalized values for the five editable species fields."""

    model_config = ConfigDict(frozen=True)

    scientific_name: str
    common_name: str | None = None
    kingdom: Kingdom
    total_population: int | None = None
    description: str | None = None

    @field_validator("scientific_name", mode="before")
    @classmethod
    def validate_scientific_name(cls, v: Any) -> Any:
        """Scientific name is required and stored trimmed."""
        if v is None:
            raise ValueError("Scientific name is required")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Scientific name is required")
        return v

    @field_validator("common_name", "description", mode="before")
    @classmethod
    def normalize_optional_text(cls, v: Any) -> Any:
        """Blank optional text is stored as absent."""
        return _blank_to_none(v)

    @field_validator("total_population", mode="before")
    @classmethod
    def validate_total_population(cls, v: Any) -> int | None:
        """Coerce to a non-negative whole number; blank means unknown."""
        v = _blank_to_none(v)
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError("Total population must be a whole number")

        number: int | float
        if isinstance(v, str):
            try:
                number = int(v)
            except ValueError:
                try:
                    number = float(v)
                except ValueError:
                    raise ValueError("Total population must be a whole number") from None
        elif isinstance(v, int | float):
            number = v
        else:
            raise ValueError("Total population must be a whole number")

        if isinstance(number, float):
            if not number.is_integer():
                raise ValueError("Total population must be a whole number")
            number = int(number)
        if number < 0:
            raise ValueError("Total population cannot be negative")
        return number


@dataclass(frozen=True)
class ValidationResult:
    """Either validated values or per-field error messages."""

    values: SpeciesEditValues | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when the input was accepted."""
        return self.values is not None


def _error_message(error: Mapping[str, Any]) -> str:
    """Turn a pydantic error entry into a message fit for a form control."""
    error_type = error.get("type")
    if error_type == "value_error":
        return str(error["ctx"]["error"])
    if error_type == "missing":
        return "This field is required"
    if error_type == "enum":
        return "Must be one of: " + ", ".join(kingdom.value for kingdom in Kingdom)
    if error_type == "string_type":
        return "Must be text"
    return str(error.get("msg", "Invalid value"))


def validate_species_edit(raw: Mapping[str, Any]) -> ValidationResult:
    """Validate raw edit input for a species record.

    Args:
        raw: Mapping of field name to raw value (form strings, JSON values or None)

    Returns:
        ValidationResult carrying either ``values`` or ``errors``
    """
    try:
        values = SpeciesEditValues.model_validate(dict(raw))
    except ValidationError as e:
        errors: dict[str, list[str]] = {}
        for error in e.errors():
            loc = error.get("loc") or ("__all__",)
            errors.setdefault(str(loc[0]), []).append(_error_message(error))
        return ValidationResult(errors=errors)
    return ValidationResult(values=values)
