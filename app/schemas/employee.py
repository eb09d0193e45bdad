"""
Pydantic schemas for employees, genders and the edit form.
"""

from typing import Optional
from pydantic import BaseModel, Field


class Gender(BaseModel):
    """Reference data served by /api/genders."""
    id: int
    name: str

    class Config:
        frozen = True


class Employee(BaseModel):
    """
    Employee record as exchanged with the API.

    Frozen so a record captured at edit-start can serve as the comparison
    baseline without being altered by later form edits.
    """
    id: Optional[int] = Field(None, description="Server-assigned identifier, absent until persisted")
    name: str
    nic: str = Field(..., description="National identity code")
    email: str
    gender: Optional[Gender] = None

    class Config:
        frozen = True


class FormState(BaseModel):
    """Draft values of the employee form. Never sent to the API."""
    name: str = ""
    nic: str = ""
    email: str = ""
    gender: Optional[Gender] = None
