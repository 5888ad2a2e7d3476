"""State holders for the species details view and the edit dialog."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from speciesatlas.species.forms import EditSpeciesForm
from speciesatlas.species.models import SpeciesRecord
from speciesatlas.species.submission import SpeciesUpdateService

logger = logging.getLogger(__name__)

MISSING_VALUE = "—"

RefreshCallback = Callable[[], Awaitable[None] | None]


class SubmitOutcome(str, Enum):
    """What happened to one press of the Save button."""

    SAVED = "saved"
    INVALID = "invalid"
    FAILED = "failed"
    IGNORED = "ignored"  # Another submission was still in flight


class EditSpeciesDialog:
    """Edit surface for one species record.

    Holds the open/closed state and the form, and refuses a second submit
    while one is still waiting on the store.
    """

    def __init__(
        self,
        species: SpeciesRecord,
        update_service: SpeciesUpdateService,
        on_refresh: RefreshCallback | None = None,
    ) -> None:
        self.species = species
        self.update_service = update_service
        self.on_refresh = on_refresh
        self.is_open = False
        self.is_submitting = False
        self.form = EditSpeciesForm.for_species(species)

    def open(self) -> None:
        """Show the dialog with the form reset to the stored values."""
        self.form = EditSpeciesForm.for_species(self.species)
        self.is_open = True

    def close(self) -> None:
        """Hide the dialog."""
        self.is_open = False

    @property
    def can_submit(self) -> bool:
        """Whether the Save button is enabled."""
        return not self.is_submitting

    async def submit(self, raw: Any) -> SubmitOutcome:
        """Validate ``raw`` form input and, if valid, send it to the store.

        Args:
            raw: Form data with ``getlist`` (e.g. a starlette FormData) or a
                plain mapping of field name to value
        """
        if self.is_submitting:
            logger.debug("Ignoring submit for %s: previous submit in flight", self.species.id)
            return SubmitOutcome.IGNORED

        self.form = self._bind(raw)
        if not self.form.validate() or self.form.cleaned is None:
            return SubmitOutcome.INVALID

        self.is_submitting = True
        try:
            result = await self.update_service.submit(self.species.id, self.form.cleaned)
        finally:
            self.is_submitting = False

        if not result.ok:
            return SubmitOutcome.FAILED

        self.close()
        if self.on_refresh is not None:
            refreshed = self.on_refresh()
            if refreshed is not None:
                await refreshed
        return SubmitOutcome.SAVED

    def _bind(self, raw: Any) -> EditSpeciesForm:
        if hasattr(raw, "getlist"):
            return EditSpeciesForm.for_species(self.species, formdata=raw)
        form = EditSpeciesForm.for_species(self.species)
        if isinstance(raw, Mapping):
            for name, value in raw.items():
                if name in form._fields:
                    form[name].data = value
        return form


@dataclass(frozen=True)
class DetailRow:
    """One label/value line of the details view."""

    label: str
    value: str


class SpeciesDetailsView:
    """Read-only presentation of a species, with edit gating for its author.

    Gating is a plain equality check on the caller-supplied session id; the
    API re-checks it before any write reaches the store.
    """

    def __init__(self, species: SpeciesRecord, session_id: str | None) -> None:
        self.species = species
        self.session_id = session_id

    @property
    def can_edit(self) -> bool:
        """Only the record's author is offered the edit dialog."""
        return self.session_id is not None and self.session_id == self.species.author

    @property
    def title(self) -> str:
        """Dialog title: common name followed by the scientific name."""
        common = self.species.common_name or ""
        return f"{common} ({self.species.scientific_name})".strip()

    def rows(self) -> list[DetailRow]:
        """Label/value pairs in display order."""
        species = self.species
        population = (
            f"{species.total_population:,}"
            if species.total_population is not None
            else MISSING_VALUE
        )
        kingdom = getattr(species.kingdom, "value", species.kingdom)
        return [
            DetailRow("Scientific name", species.scientific_name),
            DetailRow("Common name", species.common_name or ""),
            DetailRow("Total population", population),
            DetailRow("Kingdom", kingdom or MISSING_VALUE),
            DetailRow("Description", species.description or MISSING_VALUE),
        ]
