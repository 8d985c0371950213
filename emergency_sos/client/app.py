"""Client-side SOS workflow: local contacts, server sync, SOS trigger."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from emergency_sos.client.api import SosApiClient, SosApiError
from emergency_sos.client.contact_cache import CachedContact, ContactCache
from emergency_sos.client.location import CapturedLocation, LocationProvider, capture_location

logger = logging.getLogger(__name__)


class SosInProgressError(RuntimeError):
    """Raised when an SOS is triggered while another one is still being sent."""


@dataclass
class SyncResult:
    """Whether a local change reached the server. The local change is kept either way."""

    synced: bool
    error: str | None = None


@dataclass
class SosReport:
    location: CapturedLocation
    map_link: str
    recipient_count: int
    response: dict[str, Any] = field(repr=False)


class SosClientApp:
    def __init__(
        self,
        cache: ContactCache,
        api: SosApiClient,
        location_provider: LocationProvider | None,
        location_timeout_ms: int = 10_000,
    ) -> None:
        self.cache = cache
        self.api = api
        self.location_provider = location_provider
        self.location_timeout_ms = location_timeout_ms
        self._sending = False
        self.cache.load()

    @property
    def sending(self) -> bool:
        return self._sending

    @property
    def contacts(self) -> list[CachedContact]:
        return self.cache.contacts

    def check_server(self) -> dict[str, Any] | None:
        """Server health, or None when it cannot be reached."""
        try:
            return self.api.health()
        except SosApiError as exc:
            logger.warning("Server not reachable: %s", exc)
            return None

    def sync(self) -> SyncResult:
        """Push every cached contact to the server."""
        if not self.cache.contacts:
            return SyncResult(synced=True)
        try:
            self.api.sync_contacts(self.cache.contacts)
        except SosApiError as exc:
            logger.warning("Contacts kept locally but failed to sync to server: %s", exc)
            return SyncResult(synced=False, error=str(exc))
        return SyncResult(synced=True)

    def add_contact(self, name: str, phone: str) -> SyncResult:
        """Save locally (raises ValidationError on bad input), then sync."""
        contact = self.cache.add(name, phone)
        logger.info("Contact added: %s (%s)", contact.name, contact.phone)
        return self.sync()

    def delete_contact(self, phone: str) -> SyncResult:
        """Remove locally, then delete on the server.

        A contact the server never had counts as synced.
        """
        removed = self.cache.remove(phone)
        if removed:
            logger.info("Contact deleted: %s", phone)
        try:
            self.api.delete_contact(phone.strip())
        except SosApiError as exc:
            if exc.status_code == 404:
                return SyncResult(synced=True)
            logger.warning("Contact removed locally but failed to sync to server: %s", exc)
            return SyncResult(synced=False, error=str(exc))
        return SyncResult(synced=True)

    async def trigger_sos(self) -> SosReport:
        """Capture the location and send the SOS with the cached contacts.

        Raises LocationError or SosApiError when the alert could not be sent,
        and SosInProgressError while a previous alert is still in flight.
        Recipients that failed or were simulated do not raise.
        """
        if self._sending:
            raise SosInProgressError("An SOS is already being sent")
        self._sending = True
        try:
            location = await capture_location(self.location_provider, self.location_timeout_ms)
            # the HTTP call blocks, keep the event loop free while it runs
            response = await asyncio.to_thread(self.api.send_sos, location, list(self.cache.contacts))
        finally:
            self._sending = False
        results = response.get("smsResults", [])
        return SosReport(
            location=location,
            map_link=response.get("googleMapsLink", ""),
            recipient_count=len(results),
            response=response,
        )
