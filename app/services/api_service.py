"""
HTTP client for the employee API.

Wraps httpx with one method per verb. Every response body is the uniform
envelope (message, statusCode, timestamp, data) and is parsed into
ApiResponse[T]. Any failure surfaces as ApiServiceError.
"""

import logging
from typing import Any, Optional, Type
import httpx
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.schemas.api_response import ApiResponse

logger = logging.getLogger(__name__)


class ApiEndpoints:
    """Resource paths of the employee API."""

    EMPLOYEES = "/api/employees"
    GENDERS = "/api/genders"

    @classmethod
    def employee(cls, employee_id: int) -> str:
        return f"{cls.EMPLOYEES}/{employee_id}"


class ApiServiceError(Exception):
    """Exception raised for network, HTTP status and decoding failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiService:
    """
    Async client bound to a single base URL.

    No retries and no timeout configuration beyond the httpx defaults.
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url or settings.API_BASE_URL
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def get(self, path: str, data_type: Type[Any]) -> ApiResponse:
        return await self._request("GET", path, data_type)

    async def post(self, path: str, payload: Any, data_type: Type[Any]) -> ApiResponse:
        return await self._request("POST", path, data_type, payload)

    async def put(self, path: str, payload: Any, data_type: Type[Any]) -> ApiResponse:
        return await self._request("PUT", path, data_type, payload)

    async def delete(self, path: str, data_type: Type[Any] = Optional[Any]) -> ApiResponse:
        return await self._request("DELETE", path, data_type)

    async def _request(self, method: str, path: str, data_type: Type[Any], payload: Any = None) -> ApiResponse:
        """
        Send one request and unwrap the envelope.

        Args:
            method: HTTP verb
            path: Resource path relative to the base URL
            data_type: Type of the envelope's data field
            payload: Request body (pydantic model or JSON-compatible value)

        Returns:
            Parsed ApiResponse[data_type]

        Raises:
            ApiServiceError: On network failure, non-2xx status or a body
                that is not a valid envelope
        """
        body = _to_json(payload)
        logger.info(f"{method} {path}")

        try:
            response = await self._client.request(method, path, json=body)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiServiceError(f"Network error: {e}") from e

        if not response.is_success:
            message = _error_message(response)
            logger.error(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiServiceError(message, status_code=response.status_code)

        try:
            envelope = ApiResponse[data_type].model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"{method} {path} returned an invalid envelope: {e}")
            raise ApiServiceError(
                f"Invalid response from {path}", status_code=response.status_code
            ) from e

        logger.debug(f"{method} {path} -> {envelope.status_code} {envelope.message}")
        return envelope

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _to_json(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    return payload


def _error_message(response: httpx.Response) -> str:
    """Prefer the envelope message the server sends with error statuses."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed with status {response.status_code}"
