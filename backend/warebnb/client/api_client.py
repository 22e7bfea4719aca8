# Overview: HTTP wrapper for the Warebnb API with a uniform result shape and toast side effects.

"""
API client

Every call returns an ApiResult and never raises for HTTP or transport
failures. When show_toast is on, a success or error notification is
pushed to the notifier:

- success: 2xx and the body does not say success=false (5000 ms)
- error:   anything else, with the status code and body appended (10000 ms)

Nothing is retried.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from .notifications import ERROR_DURATION_MS, SUCCESS_DURATION_MS, Notifier, NullNotifier


logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully"
DEFAULT_ERROR_MESSAGE = "An error occurred"
INVALID_JSON_ERROR = "Invalid JSON response"
RAW_BODY_PREVIEW = 200

_ENVELOPE_KEYS = {"success", "data", "error", "message"}


@dataclass
class ApiResult:
    success: bool
    data: Any = None
    error: Optional[str] = None
    message: Optional[str] = None
    status: Optional[int] = None
    # Any other top-level keys the server sent (details, required_permission, ...)
    extra: Dict[str, Any] = field(default_factory=dict)

    def body(self) -> Dict[str, Any]:
        """The response envelope as the server (or the client) produced it."""
        payload = {"success": self.success}
        if self.data is not None:
            payload["data"] = self.data
        if self.error is not None:
            payload["error"] = self.error
        if self.message is not None:
            payload["message"] = self.message
        payload.update(self.extra)
        return payload


class ApiClient:
    """
    Thin wrapper around httpx.Client.

    transport lets tests plug in httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str,
        notifier: Optional[Notifier] = None,
        transport: Optional[httpx.BaseTransport] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.notifier = notifier or NullNotifier()
        self.client = httpx.Client(base_url=self.base_url, transport=transport, headers=headers or {})
        self.token: Optional[str] = None

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    def _headers(self, extra: Optional[Dict] = None, is_multipart: bool = False) -> Dict:
        headers = {} if is_multipart else {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if extra:
            headers.update(extra)
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        files: Any = None,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        show_toast: bool = True,
        success_message: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> ApiResult:
        try:
            kwargs: Dict[str, Any] = {
                "headers": self._headers(headers, is_multipart=files is not None),
                "params": params,
            }
            if files is not None:
                kwargs["files"] = files
            elif json_body is not None:
                kwargs["content"] = json.dumps(json_body)

            response = self.client.request(method, path, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError) as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            reason = str(exc) or "Network error occurred"
            if show_toast:
                message = error_message or reason
                self.notifier.add_notification(
                    "error",
                    f"{message}\n\nError: {type(exc).__name__}: {reason}",
                    ERROR_DURATION_MS,
                )
            return ApiResult(success=False, error=reason)

        result = self._parse(response)

        if show_toast:
            if response.is_success and result.success:
                self.notifier.add_notification(
                    "success",
                    success_message or self._success_text(result),
                    SUCCESS_DURATION_MS,
                )
            else:
                self.notifier.add_notification(
                    "error",
                    self._error_text(result, response.status_code, error_message),
                    ERROR_DURATION_MS,
                )

        return result

    def _parse(self, response: httpx.Response) -> ApiResult:
        text = response.text
        try:
            payload = json.loads(text)
        except ValueError:
            logger.warning("Non-JSON response from %s (%s)", response.request.url, response.status_code)
            return ApiResult(
                success=False,
                error=INVALID_JSON_ERROR,
                message=text[:RAW_BODY_PREVIEW],
                status=response.status_code,
            )

        if not isinstance(payload, dict):
            return ApiResult(success=response.is_success, data=payload, status=response.status_code)

        return ApiResult(
            success=response.is_success and payload.get("success") is not False,
            data=payload.get("data"),
            error=payload.get("error"),
            message=payload.get("message"),
            status=response.status_code,
            extra={k: v for k, v in payload.items() if k not in _ENVELOPE_KEYS},
        )

    @staticmethod
    def _success_text(result: ApiResult) -> str:
        if result.message and result.success:
            return result.message
        return DEFAULT_SUCCESS_MESSAGE

    @staticmethod
    def _error_text(result: ApiResult, status_code: int, error_message: Optional[str]) -> str:
        if error_message:
            message = error_message
        elif result.error:
            message = result.error
        elif result.message:
            message = result.message
        else:
            message = DEFAULT_ERROR_MESSAGE

        details = result.extra.get("details")
        if details:
            message = f"{message}: {details}"

        return f"{message}\n\n{status_code}: {json.dumps(result.body(), indent=2)}"

    def get(self, path: str, params: Optional[Dict] = None, **options) -> ApiResult:
        return self.request("GET", path, params=params, **options)

    def post(self, path: str, body: Any = None, **options) -> ApiResult:
        return self.request("POST", path, json_body=body, **options)

    def put(self, path: str, body: Any = None, **options) -> ApiResult:
        return self.request("PUT", path, json_body=body, **options)

    def patch(self, path: str, body: Any = None, **options) -> ApiResult:
        return self.request("PATCH", path, json_body=body, **options)

    def delete(self, path: str, **options) -> ApiResult:
        return self.request("DELETE", path, **options)

    def login(self, email: str, password: str) -> ApiResult:
        """Authenticate and keep the bearer token for later calls."""
        result = self.post(
            "/api/v1/auth/login",
            {"email": email, "password": password},
            show_toast=False,
        )
        if result.success and result.data:
            self.token = result.data.get("token")
        return result

    def logout(self) -> ApiResult:
        result = self.post("/api/v1/auth/logout", show_toast=False)
        if result.success:
            self.token = None
        return result

    def close(self):
        self.client.close()
