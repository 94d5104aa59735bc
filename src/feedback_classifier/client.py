"""
HTTP client for the Hugging Face inference router.

Posts a JSON payload to ``{base_url}/{inference_path}/{model}`` with a
bearer token and returns the decoded JSON body.  Failures are mapped onto
the package's error types and are never retried.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from feedback_classifier.config import Settings
from feedback_classifier.errors import (
    MalformedResponseError,
    RemoteCallError,
    TransportError,
)

logger = structlog.get_logger()


class ModelClient:
    """Issue one authenticated inference request per :meth:`call`.

    Uses a lazily created :class:`httpx.AsyncClient` that is reused
    across calls until :meth:`close` is awaited.

    Args:
        settings: Application settings carrying the base URL, inference
            path, API key and request timeout.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ModelClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Return (and lazily create) the shared ``httpx.AsyncClient``."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.settings.request_timeout)
        return self._client

    def endpoint_url(self, model: str) -> str:
        """Build the inference URL for *model*."""
        base = self.settings.base_url.rstrip("/")
        path = self.settings.inference_path.strip("/")
        return f"{base}/{path}/{model.strip('/')}"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

    async def call(self, model: str, payload: dict[str, Any]) -> Any:
        """POST *payload* to *model* and return the decoded JSON body.

        Args:
            model: Namespaced model id, e.g. ``facebook/bart-large-mnli``.
            payload: JSON-serialisable request body.

        Returns:
            The JSON-decoded response body, unvalidated.

        Raises:
            ValueError: If *model* is empty.
            TransportError: On connection, DNS, timeout or body-decoding failures.
            RemoteCallError: On any non-2xx response.
            MalformedResponseError: If a 2xx body is not valid JSON.
        """
        if not model or not model.strip():
            raise ValueError("model identifier must be a non-empty string")

        url = self.endpoint_url(model)
        log = logger.bind(model=model)
        log.debug("model_call_started", url=url)

        client = await self._get_client()
        try:
            resp = await client.post(url, json=payload, headers=self.headers)
        except httpx.RequestError as exc:
            log.warning("model_call_transport_error", error=str(exc))
            raise TransportError(url, exc) from exc

        if not resp.is_success:
            log.warning("model_call_failed", status=resp.status_code)
            raise RemoteCallError(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            log.warning("model_call_invalid_json", status=resp.status_code)
            raise MalformedResponseError(
                f"{model} returned a non-JSON body: {resp.text[:200]!r}"
            ) from exc

        log.debug("model_call_succeeded", status=resp.status_code)
        return data

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
