"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- An in-memory fake of the employee API behind httpx.MockTransport
- ApiService and EmployeeController wired to the fake
- FastAPI test client serving the employee page
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.services.api_service import ApiService
from app.services.employee_controller import EmployeeController
from main import app

TIMESTAMP = "2024-01-01T10:00:00"


class FakeEmployeeApi:
    """
    In-memory stand-in for the employee backend.

    Answers every request with the standard envelope and records what was
    called so tests can assert on requests and payloads.
    """

    def __init__(self, employees=None, genders=None):
        self.genders = list(genders or [])
        self.employees = {e["id"]: e for e in (employees or [])}
        self.next_id = max(self.employees, default=0) + 1
        self.requests = []
        self.failures = {}

    def fail(self, method, path, status_code=500, message="Internal server error"):
        """Make the next matching requests fail with the given status."""
        self.failures[(method, path)] = (status_code, message)

    def calls(self, method, path):
        return [r for r in self.requests if r["method"] == method and r["path"] == path]

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        self.requests.append({"method": request.method, "path": path, "json": body})

        if (request.method, path) in self.failures:
            status_code, message = self.failures[(request.method, path)]
            return self._envelope(status_code, message, None)

        if path == "/api/genders" and request.method == "GET":
            return self._envelope(200, "Genders retrieved", self.genders)

        if path == "/api/employees":
            if request.method == "GET":
                return self._envelope(200, "Employees retrieved", list(self.employees.values()))
            if request.method == "POST":
                employee = dict(body, id=self.next_id)
                self.employees[employee["id"]] = employee
                self.next_id += 1
                return self._envelope(201, "Employee saved successfully", employee)
            if request.method == "PUT":
                if body.get("id") not in self.employees:
                    return self._envelope(404, "Employee not found", None)
                self.employees[body["id"]] = body
                return self._envelope(200, "Employee updated successfully", body)

        if path.startswith("/api/employees/") and request.method == "DELETE":
            employee_id = int(path.rsplit("/", 1)[-1])
            if employee_id not in self.employees:
                return self._envelope(404, "Employee not found", None)
            del self.employees[employee_id]
            return self._envelope(200, "Employee deleted successfully", None)

        return self._envelope(404, "Not found", None)

    @staticmethod
    def _envelope(status_code, message, data):
        return httpx.Response(status_code, json={
            "message": message,
            "statusCode": status_code,
            "timestamp": TIMESTAMP,
            "data": data,
        })


@pytest.fixture
def sample_genders():
    return [{"id": 1, "name": "Female"}, {"id": 2, "name": "Male"}]


@pytest.fixture
def sample_employees():
    return [{
        "id": 1,
        "name": "Alice",
        "nic": "N1",
        "email": "a@x.com",
        "gender": {"id": 1, "name": "Female"},
    }]


@pytest.fixture
def fake_api(sample_employees, sample_genders):
    return FakeEmployeeApi(employees=sample_employees, genders=sample_genders)


@pytest.fixture
def api_service(fake_api):
    return ApiService(
        base_url="http://employee-api.test",
        transport=httpx.MockTransport(fake_api.handle),
    )


@pytest.fixture
def controller(api_service):
    return EmployeeController(api_service)


@pytest.fixture
def client(controller):
    """
    FastAPI test client whose controller talks to the fake API.
    """
    with TestClient(app) as test_client:
        app.state.controller = controller
        yield test_client
