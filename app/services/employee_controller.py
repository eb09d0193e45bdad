"""
View-controller for the employee page.

Owns the whole in-memory view: loaded employees and genders, the draft form,
the edit baseline and a single ViewState value. Every mutation reloads the
employee list from the API afterwards; nothing is patched locally.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, model_validator

from app.schemas.employee import Employee, FormState, Gender
from app.services.api_service import ApiEndpoints, ApiService, ApiServiceError
from app.services.employee_form import (
    FORM_FIELDS,
    FormValidationError,
    build_candidate,
    changed_fields,
    form_from_employee,
    resolve_gender,
    validate_form,
)

logger = logging.getLogger(__name__)


class ViewStatus(str, Enum):
    """What the page is doing right now"""
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUBMITTING = "SUBMITTING"
    UPDATING = "UPDATING"
    ERROR = "ERROR"


class ViewState(BaseModel):
    """
    Single state value replacing independent loading/submitting/updating/error
    flags. The error message only exists in the ERROR status.
    """
    status: ViewStatus = ViewStatus.IDLE
    error: Optional[str] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def error_only_when_failed(self) -> "ViewState":
        if (self.status == ViewStatus.ERROR) != (self.error is not None):
            raise ValueError("error must be set exactly when status is ERROR")
        return self

    @classmethod
    def idle(cls) -> "ViewState":
        return cls(status=ViewStatus.IDLE)

    @classmethod
    def loading(cls) -> "ViewState":
        return cls(status=ViewStatus.LOADING)

    @classmethod
    def submitting(cls) -> "ViewState":
        return cls(status=ViewStatus.SUBMITTING)

    @classmethod
    def updating(cls) -> "ViewState":
        return cls(status=ViewStatus.UPDATING)

    @classmethod
    def failed(cls, message: str) -> "ViewState":
        return cls(status=ViewStatus.ERROR, error=message)

    @property
    def is_loading(self) -> bool:
        return self.status == ViewStatus.LOADING

    @property
    def is_submitting(self) -> bool:
        return self.status == ViewStatus.SUBMITTING

    @property
    def is_updating(self) -> bool:
        return self.status == ViewStatus.UPDATING


class EmployeeController:
    """
    Form + list controller for a single user session.

    Handles:
    - Initial concurrent load of employees and genders
    - Draft form edits and gender resolution
    - Create, update (with change list) and delete, each followed by a reload
    - Edit/clear bookkeeping that drives button enablement
    """

    def __init__(self, api: ApiService):
        self.api = api
        self.employees: List[Employee] = []
        self.genders: List[Gender] = []
        self.form = FormState()
        self.baseline: Optional[Employee] = None
        self.changes: List[str] = []
        self.notice: Optional[str] = None
        self.state = ViewState.idle()
        self.loaded = False
        self._load_task: Optional[asyncio.Future] = None

    @property
    def candidate(self) -> Optional[Employee]:
        return build_candidate(self.form)

    @property
    def can_create(self) -> bool:
        return self.baseline is None and not self.state.is_submitting

    @property
    def can_update(self) -> bool:
        return self.baseline is not None and not self.state.is_updating

    def find_employee(self, employee_id: int) -> Optional[Employee]:
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        return None

    async def load(self) -> None:
        """
        Fetch employees and genders concurrently.

        A failure of one fetch is recorded but never prevents the other from
        populating its list.
        """
        self.state = ViewState.loading()
        try:
            results = await asyncio.gather(
                self._fetch_employees(),
                self._fetch_genders(),
                return_exceptions=True,
            )

            errors = []
            for result in results:
                if isinstance(result, ApiServiceError):
                    errors.append(result.message)
                elif isinstance(result, BaseException):
                    raise result

            self.loaded = True
            if errors:
                self.state = ViewState.failed(errors[0])
        finally:
            if self.state.is_loading:
                self.state = ViewState.idle()
        logger.info(f"Loaded {len(self.employees)} employees and {len(self.genders)} genders")

    async def ensure_loaded(self) -> None:
        """
        Run the mount load once.

        Callers arriving while the load is in flight await the same load
        instead of fetching again. A load that raised is retried next time.
        """
        if self._load_task is None:
            self._load_task = asyncio.ensure_future(self.load())
        try:
            await asyncio.shield(self._load_task)
        except Exception:
            self._load_task = None
            raise

    def update_field(self, field: str, value: Optional[str]) -> None:
        """
        Apply one form edit.

        Raises:
            ValueError: If field is not a form field
        """
        if field not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {field}")

        if field == "gender":
            gender = resolve_gender(value, self.genders)
            if gender is None and value:
                logger.warning(f"Gender selection {value!r} does not match a loaded gender")
            self.form = self.form.model_copy(update={"gender": gender})
        else:
            self.form = self.form.model_copy(update={field: value or ""})

    async def submit_create(self) -> bool:
        """
        Validate the form and POST a new employee.

        Returns:
            True when the employee was created
        """
        try:
            candidate = validate_form(self.form)
        except FormValidationError as e:
            self.state = ViewState.failed(str(e))
            return False

        self.notice = None
        self.state = ViewState.submitting()
        try:
            response = await self.api.post(ApiEndpoints.EMPLOYEES, candidate, Optional[Employee])
            await self._reload_employees()
        except ApiServiceError as e:
            logger.error(f"Failed to create employee {candidate.name}: {e.message}")
            self.state = ViewState.failed(e.message)
            return False
        finally:
            if self.state.is_submitting:
                self.state = ViewState.idle()

        logger.info(f"Created employee {candidate.name}")
        self._reset_form()
        self.notice = response.message or "Employee created"
        self.state = ViewState.idle()
        return True

    async def submit_update(self) -> bool:
        """
        Surface the change list, validate, then PUT the edited employee.

        Returns:
            True when the employee was updated
        """
        if self.baseline is None:
            self.state = ViewState.failed("Select an employee to update")
            return False

        self.changes = changed_fields(self.baseline, self.form)
        logger.info(f"Changes for employee {self.baseline.id}: {self.changes}")

        try:
            candidate = validate_form(self.form)
        except FormValidationError as e:
            self.state = ViewState.failed(str(e))
            return False

        candidate = candidate.model_copy(update={"id": self.baseline.id})

        self.notice = None
        self.state = ViewState.updating()
        try:
            response = await self.api.put(ApiEndpoints.EMPLOYEES, candidate, Optional[Employee])
            await self._reload_employees()
        except ApiServiceError as e:
            logger.error(f"Failed to update employee {candidate.id}: {e.message}")
            self.state = ViewState.failed(e.message)
            return False
        finally:
            if self.state.is_updating:
                self.state = ViewState.idle()

        logger.info(f"Updated employee {candidate.id}")
        changes = self.changes
        self._reset_form()
        self.changes = changes
        self.notice = response.message or "Employee updated"
        self.state = ViewState.idle()
        return True

    def start_edit(self, employee_id: int) -> Employee:
        """
        Capture a row as the update baseline and copy it into the form.

        Raises:
            KeyError: If no loaded employee has this id
        """
        employee = self.find_employee(employee_id)
        if employee is None:
            raise KeyError(employee_id)

        self.baseline = employee
        self.form = form_from_employee(employee)
        self.changes = []
        return employee

    async def delete_employee(self, employee_id: int, confirm: Callable[[str], bool]) -> bool:
        """
        Delete an employee after the user confirms.

        Args:
            employee_id: Id of the employee to remove
            confirm: Prompt callback; returning False cancels the delete

        Returns:
            True when the employee was deleted
        """
        if not confirm(self.delete_prompt(employee_id)):
            logger.info(f"Delete of employee {employee_id} cancelled")
            return False

        self.notice = None
        try:
            response = await self.api.delete(ApiEndpoints.employee(employee_id))
            await self._reload_employees()
        except ApiServiceError as e:
            logger.error(f"Failed to delete employee {employee_id}: {e.message}")
            self.state = ViewState.failed(e.message)
            return False

        logger.info(f"Deleted employee {employee_id}")
        self.notice = response.message or "Employee deleted"
        return True

    def delete_prompt(self, employee_id: int) -> str:
        employee = self.find_employee(employee_id)
        name = employee.name if employee else f"#{employee_id}"
        return f"Are you sure you want to delete employee {name}?"

    def clear(self) -> None:
        self._reset_form()

    def _reset_form(self) -> None:
        self.form = FormState()
        self.baseline = None
        self.changes = []

    async def _fetch_employees(self) -> None:
        response = await self.api.get(ApiEndpoints.EMPLOYEES, List[Employee])
        self.employees = response.data

    async def _fetch_genders(self) -> None:
        response = await self.api.get(ApiEndpoints.GENDERS, List[Gender])
        self.genders = response.data

    async def _reload_employees(self) -> None:
        await self._fetch_employees()
