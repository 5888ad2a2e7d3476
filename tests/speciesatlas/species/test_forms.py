"""Tests for the WTForms edit form."""

from starlette.datastructures import FormData

from speciesatlas.species.forms import EditSpeciesForm
from speciesatlas.species.models import Kingdom


class TestEditSpeciesForm:
    """Test rendering data and validation of the edit form."""

    def test_prefills_from_species(self, make_species):
        """Should start from the stored values."""
        form = EditSpeciesForm.for_species(make_species(description=None))

        assert form.scientific_name.data == "Panthera leo"
        assert form.common_name.data == "Lion"
        assert form.kingdom.data == "Animalia"
        assert form.total_population.data == "23000"
        assert form.description.data == ""

    def test_kingdom_offers_all_six_choices(self, make_species):
        """Should render the kingdom as a select over every kingdom."""
        form = EditSpeciesForm.for_species(make_species())

        assert [value for value, _label in form.kingdom.choices] == [k.value for k in Kingdom]

    def test_valid_submission_sets_cleaned_values(self, make_species):
        """Should validate posted data and expose the normalized values."""
        formdata = FormData(
            [
                ("scientific_name", " Panthera leo "),
                ("common_name", "African lion"),
                ("kingdom", "Animalia"),
                ("total_population", "20000"),
                ("description", ""),
            ]
        )
        form = EditSpeciesForm.for_species(make_species(), formdata=formdata)

        assert form.validate()
        assert form.cleaned.scientific_name == "Panthera leo"
        assert form.cleaned.common_name == "African lion"
        assert form.cleaned.total_population == 20000
        assert form.cleaned.description is None

    def test_errors_attach_to_each_failing_field(self, make_species):
        """Should put every error message on the control it belongs to."""
        formdata = FormData(
            [
                ("scientific_name", ""),
                ("common_name", ""),
                ("kingdom", "Minerals"),
                ("total_population", "-3"),
                ("description", ""),
            ]
        )
        form = EditSpeciesForm.for_species(make_species(), formdata=formdata)

        assert not form.validate()
        assert form.cleaned is None
        assert form.scientific_name.errors == ["Scientific name is required"]
        assert form.total_population.errors == ["Total population cannot be negative"]
        assert form.kingdom.errors
        assert form.common_name.errors == []
