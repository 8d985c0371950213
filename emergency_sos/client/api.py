"""HTTP client for the emergency-sos API."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote

import httpx

from emergency_sos.client.contact_cache import CachedContact
from emergency_sos.client.location import CapturedLocation

logger = logging.getLogger(__name__)


class SosApiError(Exception):
    """Raised when the API is unreachable or answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SosApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> SosApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise SosApiError(f"Server not reachable: {exc}") from exc

        if response.is_error:
            raise SosApiError(_error_detail(response), status_code=response.status_code)
        return response.json()

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")

    def sync_contacts(self, contacts: Iterable[CachedContact]) -> dict[str, Any]:
        """Push the given contacts; the server upserts them by phone."""
        payload = {"contacts": [{"name": c.name, "phone": c.phone} for c in contacts]}
        return self._request("POST", "/contacts", json=payload)

    def list_contacts(self) -> list[dict[str, Any]]:
        return self._request("GET", "/contacts")

    def delete_contact(self, phone: str) -> dict[str, Any]:
        return self._request("DELETE", f"/contacts/{quote(phone, safe='')}")

    def send_sos(self, location: CapturedLocation, contacts: Iterable[CachedContact] = ()) -> dict[str, Any]:
        payload = {
            "lat": location.lat,
            "lng": location.lng,
            "contacts": [{"name": c.name, "phone": c.phone} for c in contacts],
        }
        logger.info("Sending SOS payload: %s", payload)
        return self._request("POST", "/sos", json=payload)

    def recent_sos(self, limit: int = 20) -> list[dict[str, Any]]:
        return self._request("GET", "/sos", params={"limit": limit})


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list) and detail:
        return "; ".join(str(err.get("msg", err)) for err in detail if isinstance(err, dict)) or str(detail)
    return f"Request failed with status {response.status_code}"
