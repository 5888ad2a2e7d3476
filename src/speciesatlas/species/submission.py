"""Submission of validated species edits to the store."""

import logging
import uuid
from dataclasses import dataclass

from speciesatlas.notifications.toast import Toast, ToastQueue, ToastVariant
from speciesatlas.species.store import SpeciesStore, SpeciesStoreError
from speciesatlas.species.validation import SpeciesEditValues

logger = logging.getLogger(__name__)

SAVED_TOAST = Toast(title="Saved", description="Species updated successfully.")


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one update request."""

    ok: bool
    message: str | None = None


class SpeciesUpdateService:
    """Issues one update per submission and tells the user how it went.

    Authorization is the caller's job: only authors should be offered the
    edit surface that reaches this service.
    """

    def __init__(self, store: SpeciesStore, notifications: ToastQueue) -> None:
        self.store = store
        self.notifications = notifications

    async def submit(self, species_id: uuid.UUID, values: SpeciesEditValues) -> SubmissionResult:
        """Replace the editable fields of ``species_id`` with ``values``."""
        try:
            await self.store.update_species(species_id, values)
        except SpeciesStoreError as e:
            logger.warning("Species update rejected for %s: %s", species_id, e.message)
            self.notifications.notify(
                Toast(title="Update failed", description=e.message, variant=ToastVariant.DESTRUCTIVE)
            )
            return SubmissionResult(ok=False, message=e.message)

        self.notifications.notify(SAVED_TOAST)
        return SubmissionResult(ok=True)
