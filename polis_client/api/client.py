"""HTTP transport for the university backend.

Wraps ``httpx.AsyncClient`` and turns every way a call can fail into a
``PolisClientError``:

    network / timeout          -> TransportError
    non-2xx                    -> HTTPStatusError (envelope code if present)
    2xx + error / ERROR status -> ServerEnvelopeError
    undecodable body           -> ResponseFormatError
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from polis_client.config import Settings
from polis_client.exceptions import (
    HTTPStatusError,
    ResponseFormatError,
    ServerEnvelopeError,
    TransportError,
)
from polis_client.schemas.common import ErrorSeverity, ResponseWithStatus

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=ResponseWithStatus)


def _extract_failure(payload: Any) -> tuple[str | None, str | None]:
    """Pull ``(code, message)`` of the failing entry out of an error body.

    Either part may be missing: statuses built from a server error enum
    carry the message but leave ``code`` null.
    """
    if not isinstance(payload, dict):
        return None, None

    error = payload.get("error")
    if isinstance(error, dict) and (error.get("code") or error.get("message")):
        return _as_text(error.get("code")), _as_text(error.get("message"))

    status = payload.get("status")
    if isinstance(status, dict):
        status = [status]
    if isinstance(status, list):
        for entry in status:
            if not isinstance(entry, dict):
                continue
            if entry.get("severity") in (ErrorSeverity.ERROR.value, ErrorSeverity.FATAL.value):
                return _as_text(entry.get("code")), _as_text(entry.get("message"))
    return None, None


def _as_text(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None


class ApiClient:
    """Thin async JSON client; one instance per backend."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ApiClient":
        return cls(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ── Verbs ────────────────────────────────────────────────

    async def post(self, path: str, body: BaseModel | dict | None, response_model: type[M]) -> M:
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        return await self._request("POST", path, response_model, json_body=body)

    async def delete(self, path: str, response_model: type[M]) -> M:
        return await self._request("DELETE", path, response_model)

    # ── Internals ────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        response_model: type[M],
        json_body: Any = None,
    ) -> M:
        logger.debug(f"{method} {path}", extra={"body": json_body})
        try:
            response = await self._http.request(method, path, json=json_body)
        except httpx.TransportError as e:
            logger.warning(
                f"Transport error on {method} {path}: {e!r}",
                extra={"path": path, "method": method},
            )
            raise TransportError() from e

        payload = self._decode(response)

        if response.is_error:
            error_code, server_message = _extract_failure(payload)
            logger.warning(
                f"HTTP {response.status_code} on {method} {path}",
                extra={"path": path, "method": method, "error_code": error_code},
            )
            raise HTTPStatusError(response.status_code, error_code, server_message)

        try:
            envelope = response_model.model_validate(payload if payload is not None else {})
        except ValidationError as e:
            logger.error(
                f"Undecodable response on {method} {path}: {e}",
                extra={"path": path, "method": method},
            )
            raise ResponseFormatError(response.status_code) from e

        failure = envelope.failure()
        if failure is not None:
            error_code = str(failure.code) if failure.code is not None else None
            logger.warning(
                f"Envelope error on {method} {path}: {error_code}",
                extra={"path": path, "method": method, "error_code": error_code},
            )
            raise ServerEnvelopeError(error_code, response.status_code, failure.message)

        return envelope

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            if response.is_error:
                return None
            raise ResponseFormatError(response.status_code)
