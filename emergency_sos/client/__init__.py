"""Python client for the emergency-sos API."""

from __future__ import annotations

from emergency_sos.client.api import SosApiClient, SosApiError
from emergency_sos.client.app import SosClientApp, SosInProgressError, SosReport, SyncResult
from emergency_sos.client.contact_cache import CachedContact, ContactCache
from emergency_sos.client.location import (
    CapturedLocation,
    LocationError,
    LocationErrorReason,
    LocationRequest,
    StaticLocationProvider,
    UnsupportedLocationProvider,
    capture_location,
)

__all__ = [
    "CachedContact",
    "CapturedLocation",
    "ContactCache",
    "LocationError",
    "LocationErrorReason",
    "LocationRequest",
    "SosApiClient",
    "SosApiError",
    "SosClientApp",
    "SosInProgressError",
    "SosReport",
    "StaticLocationProvider",
    "SyncResult",
    "UnsupportedLocationProvider",
    "capture_location",
]
