"""
Pure helpers behind the employee form.

Nothing here talks to the API: gender resolution, validation of a draft into
an Employee, and the human-readable change list shown before an update.
"""

from typing import Iterable, List, Optional, Union

from app.schemas.employee import Employee, FormState, Gender

FORM_FIELDS = ("name", "nic", "email", "gender")


class FormValidationError(Exception):
    """Raised when required form fields are missing."""

    def __init__(self, errors: List[str]):
        super().__init__(", ".join(errors))
        self.errors = errors


def resolve_gender(value: Optional[str], genders: Iterable[Gender]) -> Optional[Gender]:
    """
    Map a select value onto a loaded Gender.

    Args:
        value: Raw select value (the gender id as text, or empty)
        genders: Loaded reference genders

    Returns:
        Matching Gender, or None when the value is empty, not numeric,
        or not among the loaded genders
    """
    if value is None:
        return None
    try:
        gender_id = int(str(value).strip())
    except ValueError:
        return None

    for gender in genders:
        if gender.id == gender_id:
            return gender
    return None


def validate_form(form: FormState) -> Employee:
    """
    Turn a complete draft into an Employee.

    Raises:
        FormValidationError: With one message per missing field
    """
    errors = []
    if not form.name.strip():
        errors.append("Name is required")
    if not form.nic.strip():
        errors.append("NIC is required")
    if not form.email.strip():
        errors.append("Email is required")
    if form.gender is None:
        errors.append("Gender is required")

    if errors:
        raise FormValidationError(errors)

    return Employee(
        name=form.name.strip(),
        nic=form.nic.strip(),
        email=form.email.strip(),
        gender=form.gender,
    )


def build_candidate(form: FormState) -> Optional[Employee]:
    """Derived candidate: the validated Employee, or None while incomplete."""
    try:
        return validate_form(form)
    except FormValidationError:
        return None


def changed_fields(before: Employee, after: Union[Employee, FormState]) -> List[str]:
    """
    Field-by-field comparison of a baseline and an edited record or draft.

    Draft values are trimmed first, as validate_form does before saving.
    Gender is compared by id only.
    """
    changes = []
    if before.name != after.name.strip():
        changes.append("Name is updated")
    if before.nic != after.nic.strip():
        changes.append("NIC is updated")
    if before.email != after.email.strip():
        changes.append("Email is updated")
    if _gender_id(before) != _gender_id(after):
        changes.append("Gender is updated")
    return changes


def form_from_employee(employee: Employee) -> FormState:
    return FormState(
        name=employee.name,
        nic=employee.nic,
        email=employee.email,
        gender=employee.gender,
    )


def _gender_id(record: Union[Employee, FormState]) -> Optional[int]:
    return record.gender.id if record.gender else None
