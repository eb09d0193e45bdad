"""
FastAPI dependencies shared by the page endpoints.
"""

from fastapi import HTTPException, Request, status

from app.services.api_service import ApiService
from app.services.employee_controller import EmployeeController


def get_controller(request: Request) -> EmployeeController:
    """
    Return the controller created at startup.

    Raises:
        HTTPException 503: If the application has not finished starting
    """
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee controller is not initialised",
        )
    return controller


def get_api_service(request: Request) -> ApiService:
    return get_controller(request).api
