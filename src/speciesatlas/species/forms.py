"""WTForms form behind the species edit dialog."""

from typing import Any

from wtforms import Form, SelectField, StringField, SubmitField, TextAreaField

from speciesatlas.species.models import EDITABLE_FIELDS, Kingdom, SpeciesRecord
from speciesatlas.species.validation import SpeciesEditValues, validate_species_edit


class EditSpeciesForm(Form):
    """Form for editing a species entry.

    Field-level rules live in ``validate_species_edit``; this form only
    renders the controls and carries the per-field error messages back to them.
    """

    scientific_name = StringField("Scientific name")
    common_name = StringField("Common name")
    kingdom = SelectField(
        "Kingdom",
        choices=[(kingdom.value, kingdom.value) for kingdom in Kingdom],
        validate_choice=False,
    )
    total_population = StringField("Total population")
    description = TextAreaField("Description")
    submit = SubmitField("Save")

    cleaned: SpeciesEditValues | None = None

    @classmethod
    def for_species(cls, species: SpeciesRecord, formdata: Any = None) -> "EditSpeciesForm":
        """Build a form pre-populated from ``species`` (overridden by ``formdata``)."""
        return cls(
            formdata=formdata,
            data={
                "scientific_name": species.scientific_name,
                "common_name": species.common_name or "",
                "kingdom": Kingdom(species.kingdom).value,
                "total_population": (
                    "" if species.total_population is None else str(species.total_population)
                ),
                "description": species.description or "",
            },
        )

    def raw_values(self) -> dict[str, Any]:
        """Current raw value of every editable control."""
        return {name: self[name].data for name in EDITABLE_FIELDS}

    def validate(self, extra_validators: Any = None) -> bool:
        """Validate all controls at once and attach errors to each failing one."""
        super().validate(extra_validators)

        result = validate_species_edit(self.raw_values())
        for name, messages in result.errors.items():
            if name in self._fields:
                self[name].errors = [*self[name].errors, *messages]
            else:
                self.form_errors = [*self.form_errors, *messages]

        self.cleaned = result.values
        return result.ok and not any(self[name].errors for name in EDITABLE_FIELDS)
