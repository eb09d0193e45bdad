"""
Tests for form validation, gender resolution and change detection.
"""

import pytest

from app.schemas.employee import Employee, FormState, Gender
from app.services.employee_form import (
    FormValidationError,
    build_candidate,
    changed_fields,
    form_from_employee,
    resolve_gender,
    validate_form,
)

FEMALE = Gender(id=1, name="Female")
MALE = Gender(id=2, name="Male")
GENDERS = [FEMALE, MALE]


def _complete_form(**overrides):
    values = {"name": "Alice", "nic": "N1", "email": "a@x.com", "gender": FEMALE}
    values.update(overrides)
    return FormState(**values)


class TestResolveGender:
    """Tests for mapping select values onto genders"""

    def test_matching_id(self):
        assert resolve_gender("2", GENDERS) == MALE

    def test_surrounding_whitespace(self):
        assert resolve_gender(" 1 ", GENDERS) == FEMALE

    @pytest.mark.parametrize("value", [None, "", "99", "abc"])
    def test_no_match_is_none(self, value):
        assert resolve_gender(value, GENDERS) is None

    def test_no_loaded_genders(self):
        assert resolve_gender("1", []) is None


class TestValidateForm:
    """Tests for turning a draft into an Employee"""

    def test_complete_form(self):
        employee = validate_form(_complete_form())

        assert employee.id is None
        assert employee.name == "Alice"
        assert employee.gender.id == FEMALE.id

    def test_values_are_trimmed(self):
        employee = validate_form(_complete_form(name="  Alice  "))
        assert employee.name == "Alice"

    @pytest.mark.parametrize("missing, expected", [
        (["name"], ["Name is required"]),
        (["nic"], ["NIC is required"]),
        (["email", "gender"], ["Email is required", "Gender is required"]),
        (["name", "nic", "email", "gender"],
         ["Name is required", "NIC is required", "Email is required", "Gender is required"]),
    ])
    def test_one_error_per_missing_field(self, missing, expected):
        overrides = {field: None if field == "gender" else "" for field in missing}

        with pytest.raises(FormValidationError) as exc_info:
            validate_form(_complete_form(**overrides))

        assert exc_info.value.errors == expected
        assert len(exc_info.value.errors) == len(missing)

    def test_whitespace_counts_as_missing(self):
        with pytest.raises(FormValidationError) as exc_info:
            validate_form(_complete_form(email="   "))
        assert exc_info.value.errors == ["Email is required"]

    def test_errors_joined_in_message(self):
        with pytest.raises(FormValidationError) as exc_info:
            validate_form(FormState())
        assert str(exc_info.value) == "Name is required, NIC is required, Email is required, Gender is required"


class TestBuildCandidate:
    """Tests for the derived candidate"""

    def test_complete_form_gives_candidate(self):
        candidate = build_candidate(_complete_form(gender=MALE))
        assert candidate is not None
        assert candidate.gender == MALE

    def test_incomplete_form_gives_none(self):
        assert build_candidate(_complete_form(gender=None)) is None


class TestChangedFields:
    """Tests for the change list shown before an update"""

    def setup_method(self):
        self.before = Employee(id=1, name="Alice", nic="N1", email="a@x.com", gender=FEMALE)

    def test_identical_copy_has_no_changes(self):
        assert changed_fields(self.before, self.before.model_copy()) == []

    def test_gender_change_only(self):
        after = self.before.model_copy(update={"gender": MALE})
        assert changed_fields(self.before, after) == ["Gender is updated"]

    def test_gender_compared_by_id(self):
        after = self.before.model_copy(update={"gender": Gender(id=1, name="F")})
        assert changed_fields(self.before, after) == []

    def test_all_fields_changed(self):
        after = Employee(name="Bob", nic="N2", email="b@x.com", gender=MALE)
        assert changed_fields(self.before, after) == [
            "Name is updated",
            "NIC is updated",
            "Email is updated",
            "Gender is updated",
        ]

    def test_against_draft_form(self):
        draft = form_from_employee(self.before).model_copy(update={"email": "new@x.com"})
        assert changed_fields(self.before, draft) == ["Email is updated"]

    def test_draft_is_trimmed_before_comparing(self):
        draft = form_from_employee(self.before).model_copy(update={"name": "Alice ", "nic": " N1"})
        assert changed_fields(self.before, draft) == []


def test_form_from_employee():
    employee = Employee(id=5, name="Carol", nic="N5", email="c@x.com", gender=MALE)

    form = form_from_employee(employee)

    assert form == FormState(name="Carol", nic="N5", email="c@x.com", gender=MALE)
