"""Odoo JSON-2 HTTP client."""

import json
import logging
import re
from typing import Any

import httpx

from .exceptions import (
    AccessDeniedError,
    APIError,
    AuthenticationError,
    ConnectionError,
    NotFoundError,
    OdoormError,
    TimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Odoo exception names (e.g. "odoo.exceptions.ValidationError") to client errors.
ODOO_EXCEPTIONS: list[tuple[re.Pattern[str], type[APIError]]] = [
    (re.compile(r"ValidationError|UserError"), ValidationError),
    (re.compile(r"AccessError|AccessDenied"), AccessDeniedError),
    (re.compile(r"MissingError"), NotFoundError),
]


class OdooClient:
    """HTTP client for the Odoo JSON-2 API.

    Every call is a POST of a JSON object to ``/json/2/<model>/<method>``.

    Args:
        base_url: Base URL of the Odoo server (e.g., "https://erp.example.com").
        api_key: API key sent as a bearer token.
        timeout: Read timeout in seconds.
        open_timeout: Connect timeout in seconds.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``).

    Example:
        >>> client = OdooClient("https://erp.example.com", api_key="...")
        >>> client.execute("res.partner", "search_read", {"domain": [], "limit": 5})
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        open_timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout, connect=open_timeout),
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "OdooClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def execute(self, model: str, method: str, params: dict[str, Any] | None = None) -> Any:
        """Call a model method.

        Args:
            model: Odoo model name (e.g., "res.partner").
            method: Model method (e.g., "search_read", "create", "write").
            params: Keyword parameters of the method.

        Returns:
            The decoded JSON result, or None for an empty body.

        Raises:
            TimeoutError: The server did not answer in time.
            ConnectionError: The server could not be reached.
            APIError: The server answered with an error status.
        """
        path = f"/json/2/{model}/{method}"
        response = self._post(path, params or {})
        return self._handle_response(response)

    def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        logger.info("POST %s", path)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("POST %s %s", path, json.dumps(payload, default=str))
        try:
            response = self._client.post(path, json=payload)
        except httpx.TimeoutException as e:
            raise TimeoutError("Request timed out", original_error=e) from e
        except httpx.TransportError as e:
            raise ConnectionError(
                f"Failed to connect to {self.base_url}", original_error=e
            ) from e
        logger.info("Response %s", response.status_code)
        logger.debug("Response %s: %s", response.status_code, response.text)
        return response

    def _handle_response(self, response: httpx.Response) -> Any:
        code = str(response.status_code)
        if response.is_success:
            return self._parse_body(response)
        if response.status_code == 401:
            raise AuthenticationError("Invalid credentials", code)
        if response.status_code == 403:
            raise AccessDeniedError("Access denied", code)
        if response.status_code == 404:
            raise NotFoundError("Endpoint not found", code)
        self._raise_api_error(response)

    def _raise_api_error(self, response: httpx.Response) -> None:
        code = str(response.status_code)
        fallback = f"HTTP {response.status_code}: {response.reason_phrase}"
        error_data = self._parse_error_body(response)
        if error_data is None:
            raise APIError(fallback, code)

        error_class = self._map_odoo_exception(error_data.get("name"))
        raise error_class(error_data.get("message") or fallback, code, data=error_data)

    def _parse_body(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise OdoormError("Invalid JSON response", original_error=e) from e

    def _parse_error_body(self, response: httpx.Response) -> dict[str, Any] | None:
        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    def _map_odoo_exception(self, name: str | None) -> type[APIError]:
        for pattern, error_class in ODOO_EXCEPTIONS:
            if name and pattern.search(name):
                return error_class
        return APIError
