"""Species catalogue package.

This package contains all species-related functionality:
- SpeciesRecord / Kingdom: catalogue database model
- validate_species_edit / EditSpeciesForm: edit input validation
- SpeciesStore: persistence access
- SpeciesUpdateService: submission of validated edits
- EditSpeciesDialog / SpeciesDetailsView: view state
"""

from speciesatlas.species.dialogs import EditSpeciesDialog, SpeciesDetailsView, SubmitOutcome
from speciesatlas.species.forms import EditSpeciesForm
from speciesatlas.species.models import Kingdom, SpeciesRecord
from speciesatlas.species.store import SpeciesStore, SpeciesStoreError
from speciesatlas.species.submission import SpeciesUpdateService, SubmissionResult
from speciesatlas.species.validation import (
    SpeciesEditValues,
    ValidationResult,
    validate_species_edit,
)

__all__ = [
    "EditSpeciesDialog",
    "EditSpeciesForm",
    "Kingdom",
    "SpeciesDetailsView",
    "SpeciesEditValues",
    "SpeciesRecord",
    "SpeciesStore",
    "SpeciesStoreError",
    "SpeciesUpdateService",
    "SubmissionResult",
    "SubmitOutcome",
    "ValidationResult",
    "validate_species_edit",
]
