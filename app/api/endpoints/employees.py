"""
Employee page endpoints.

Browser form posts are mapped onto EmployeeController operations and answered
with a redirect back to the page (Post/Redirect/Get).
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.core.config import settings
from app.core.deps import get_controller
from app.services.employee_controller import EmployeeController
from app.views.employee_page import render_delete_confirmation, render_employee_page

router = APIRouter(tags=["Employees"])
logger = logging.getLogger(__name__)

FORM_ACTIONS = ("create", "update", "clear")


def _back_to_page() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse)
async def employee_page(controller: EmployeeController = Depends(get_controller)):
    """
    Render the form and the employee table.

    The first visit loads employees and genders from the API.
    """
    await controller.ensure_loaded()

    return HTMLResponse(render_employee_page(controller, title=settings.PROJECT_NAME))


@router.post("/employees")
async def submit_employee_form(
    action: str = Form(...),
    name: Optional[str] = Form(None),
    nic: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    controller: EmployeeController = Depends(get_controller),
):
    """
    Apply the submitted form fields, then run the chosen action.

    Actions:
    - create: POST a new employee
    - update: PUT the employee being edited
    - clear: reset the form and leave edit mode
    """
    if action not in FORM_ACTIONS:
        raise HTTPException(status_code=400, detail=f"Unknown action: {action}")

    if action == "clear":
        controller.clear()
        return _back_to_page()

    controller.update_field("name", name)
    controller.update_field("nic", nic)
    controller.update_field("email", email)
    controller.update_field("gender", gender)

    if action == "create":
        await controller.submit_create()
    else:
        await controller.submit_update()

    return _back_to_page()


@router.post("/employees/{employee_id}/edit")
async def edit_employee(employee_id: int, controller: EmployeeController = Depends(get_controller)):
    """Load a row into the form and switch to update mode."""
    try:
        controller.start_edit(employee_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Employee not found")

    logger.info(f"Editing employee {employee_id}")
    return _back_to_page()


@router.get("/employees/{employee_id}/delete", response_class=HTMLResponse)
async def confirm_delete(employee_id: int, controller: EmployeeController = Depends(get_controller)):
    """Ask the user to confirm the delete."""
    employee = controller.find_employee(employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail="Employee not found")

    return HTMLResponse(render_delete_confirmation(
        employee,
        controller.delete_prompt(employee_id),
        title=settings.PROJECT_NAME,
    ))


@router.post("/employees/{employee_id}/delete")
async def delete_employee(
    employee_id: int,
    confirm: str = Form("no"),
    controller: EmployeeController = Depends(get_controller),
):
    """Delete the employee when the confirmation answer is yes."""
    if controller.find_employee(employee_id) is None:
        raise HTTPException(status_code=404, detail="Employee not found")

    await controller.delete_employee(employee_id, confirm=lambda prompt: confirm == "yes")
    return _back_to_page()
