"""
Envelope returned by every endpoint of the employee API.
"""

from typing import Generic, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform response wrapper: transport metadata plus the typed payload.

    Example:
        {"message": "Employees retrieved", "statusCode": 200,
         "timestamp": "2024-01-01T10:00:00", "data": [...]}
    """
    message: str = ""
    status_code: int = Field(..., alias="statusCode")
    timestamp: str = ""
    data: T

    class Config:
        populate_by_name = True
