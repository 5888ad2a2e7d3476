"""Tests for the edit dialog and details view state."""

import asyncio
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from speciesatlas.notifications.toast import ToastQueue, ToastVariant
from speciesatlas.species.dialogs import (
    MISSING_VALUE,
    EditSpeciesDialog,
    SpeciesDetailsView,
    SubmitOutcome,
)
from speciesatlas.species.store import SpeciesStore, SpeciesStoreError
from speciesatlas.species.submission import SpeciesUpdateService

VALID_INPUT = {
    "scientific_name": "Panthera leo",
    "common_name": "Lion",
    "kingdom": "Animalia",
    "total_population": "20000",
    "description": "",
}


@pytest.fixture
def species(make_species):
    """A stored lion with a known id."""
    record = make_species()
    record.id = uuid.uuid4()
    return record


@pytest.fixture
def mock_store():
    """Store double whose update succeeds by default."""
    store = MagicMock(spec=SpeciesStore)
    store.update_species = AsyncMock(return_value=None)
    return store


@pytest.fixture
def toast_queue():
    """Fresh toast queue."""
    return ToastQueue()


@pytest.fixture
def update_service(mock_store, toast_queue):
    """Update service reporting into the toast queue."""
    return SpeciesUpdateService(mock_store, toast_queue)


class TestEditSpeciesDialog:
    """Test the dialog's submit state machine."""

    @pytest.mark.asyncio
    async def test_saved_closes_and_refreshes_once(self, species, update_service, toast_queue):
        """Should close the dialog and ask the list to refresh exactly once."""
        on_refresh = MagicMock(return_value=None)
        dialog = EditSpeciesDialog(species, update_service, on_refresh=on_refresh)
        dialog.open()

        outcome = await dialog.submit(VALID_INPUT)

        assert outcome is SubmitOutcome.SAVED
        assert not dialog.is_open
        assert not dialog.is_submitting
        on_refresh.assert_called_once_with()
        assert [toast.title for toast in toast_queue.drain()] == ["Saved"]

    @pytest.mark.asyncio
    async def test_async_refresh_is_awaited(self, species, update_service):
        """Should await a coroutine refresh callback."""
        on_refresh = AsyncMock()
        dialog = EditSpeciesDialog(species, update_service, on_refresh=on_refresh)
        dialog.open()

        await dialog.submit(VALID_INPUT)

        on_refresh.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_store_failure_keeps_dialog_open(
        self, species, update_service, mock_store, toast_queue
    ):
        """Should keep the dialog open, skip refresh and show the store message."""
        mock_store.update_species.side_effect = SpeciesStoreError("duplicate key")
        on_refresh = MagicMock()
        dialog = EditSpeciesDialog(species, update_service, on_refresh=on_refresh)
        dialog.open()

        outcome = await dialog.submit(VALID_INPUT)

        assert outcome is SubmitOutcome.FAILED
        assert dialog.is_open
        assert not dialog.is_submitting
        on_refresh.assert_not_called()
        toasts = toast_queue.drain()
        assert toasts[0].description == "duplicate key"
        assert toasts[0].variant is ToastVariant.DESTRUCTIVE

    @pytest.mark.asyncio
    async def test_invalid_input_never_reaches_store(self, species, update_service, mock_store):
        """Should block submission and attach errors to the form."""
        dialog = EditSpeciesDialog(species, update_service)
        dialog.open()

        outcome = await dialog.submit({**VALID_INPUT, "scientific_name": "  "})

        assert outcome is SubmitOutcome.INVALID
        assert dialog.is_open
        mock_store.update_species.assert_not_awaited()
        assert dialog.form.scientific_name.errors == ["Scientific name is required"]

    @pytest.mark.asyncio
    async def test_second_submit_while_in_flight_is_ignored(
        self, species, update_service, mock_store
    ):
        """Should refuse a second press of Save until the first completes."""
        release = asyncio.Event()

        async def slow_update(*args):
            await release.wait()

        mock_store.update_species.side_effect = slow_update
        dialog = EditSpeciesDialog(species, update_service)
        dialog.open()

        first = asyncio.create_task(dialog.submit(VALID_INPUT))
        await asyncio.sleep(0)
        assert dialog.is_submitting
        assert not dialog.can_submit

        second = await dialog.submit(VALID_INPUT)
        release.set()

        assert second is SubmitOutcome.IGNORED
        assert await first is SubmitOutcome.SAVED
        assert mock_store.update_species.await_count == 1
        assert dialog.can_submit

    def test_open_resets_form_to_stored_values(self, species, update_service):
        """Should discard unsaved edits when reopened."""
        dialog = EditSpeciesDialog(species, update_service)
        dialog.form.common_name.data = "Edited"

        dialog.open()

        assert dialog.is_open
        assert dialog.form.common_name.data == "Lion"


class TestSpeciesDetailsView:
    """Test the read-only presentation and edit gating."""

    def test_only_author_can_edit(self, species):
        """Should offer editing to the author alone."""
        assert SpeciesDetailsView(species, "session-author").can_edit
        assert not SpeciesDetailsView(species, "someone-else").can_edit
        assert not SpeciesDetailsView(species, None).can_edit

    def test_title_combines_names(self, species):
        """Should show the common name followed by the scientific name."""
        assert SpeciesDetailsView(species, None).title == "Lion (Panthera leo)"

    def test_rows_format_population_and_placeholders(self, make_species):
        """Should group thousands and show a dash for absent values."""
        view = SpeciesDetailsView(
            make_species(total_population=1234567, description=None), None
        )

        rows = {row.label: row.value for row in view.rows()}

        assert rows["Total population"] == "1,234,567"
        assert rows["Description"] == MISSING_VALUE
        assert rows["Kingdom"] == "Animalia"
        assert [row.label for row in view.rows()] == [
            "Scientific name",
            "Common name",
            "Total population",
            "Kingdom",
            "Description",
        ]

    def test_missing_population_shows_dash(self, make_species):
        """Should render an unknown population as a dash."""
        view = SpeciesDetailsView(make_species(total_population=None), None)

        rows = {row.label: row.value for row in view.rows()}

        assert rows["Total population"] == MISSING_VALUE
