"""Device location capture for the SOS client.

Providers follow the callback shape of a browser geolocation API: they are
handed a ``LocationRequest`` and later call ``resolve`` or ``reject`` on it.
The request settles at most once, so a late error after a success (or a
second fix) is ignored, and a timeout wins over anything arriving after it.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class LocationErrorReason(str, enum.Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


_REASON_MESSAGES = {
    LocationErrorReason.PERMISSION_DENIED: "Location permission denied",
    LocationErrorReason.POSITION_UNAVAILABLE: "Location unavailable",
    LocationErrorReason.TIMEOUT: "Location request timed out",
    LocationErrorReason.UNSUPPORTED: "Geolocation not supported",
}


class LocationError(Exception):
    """Location could not be captured; ``reason`` says why."""

    def __init__(self, reason: LocationErrorReason, message: str | None = None) -> None:
        self.reason = LocationErrorReason(reason)
        super().__init__(message or _REASON_MESSAGES[self.reason])


@dataclass(frozen=True)
class CapturedLocation:
    lat: float
    lng: float
    accuracy: float | None = None  # metres, display only


class LocationRequest:
    """One-shot slot a provider settles with a fix or an error."""

    def __init__(self) -> None:
        self._future: asyncio.Future[CapturedLocation] = asyncio.get_running_loop().create_future()

    @property
    def settled(self) -> bool:
        return self._future.done()

    def resolve(self, location: CapturedLocation) -> bool:
        """Settle with a fix. Returns False if the request had already settled."""
        if self._future.done():
            logger.debug("Ignoring location after request settled: %s", location)
            return False
        self._future.set_result(location)
        return True

    def reject(self, error: LocationError) -> bool:
        """Settle with an error. Returns False if the request had already settled."""
        if self._future.done():
            logger.debug("Ignoring location error after request settled: %s", error)
            return False
        self._future.set_exception(error)
        return True

    async def wait(self, timeout_ms: int) -> CapturedLocation:
        try:
            return await asyncio.wait_for(asyncio.shield(self._future), timeout_ms / 1000)
        except asyncio.TimeoutError:
            self.reject(LocationError(LocationErrorReason.TIMEOUT))
            return await self._future


class LocationProvider(Protocol):
    def request_position(self, request: LocationRequest) -> None: ...


class StaticLocationProvider:
    """Reports a fixed position, e.g. coordinates typed on the command line."""

    def __init__(self, lat: float, lng: float, accuracy: float | None = None) -> None:
        self._location = CapturedLocation(lat=lat, lng=lng, accuracy=accuracy)

    def request_position(self, request: LocationRequest) -> None:
        request.resolve(self._location)


class UnsupportedLocationProvider:
    """Stand-in for a device without any positioning capability."""

    def request_position(self, request: LocationRequest) -> None:
        request.reject(LocationError(LocationErrorReason.UNSUPPORTED))


async def capture_location(provider: LocationProvider | None, timeout_ms: int = 10_000) -> CapturedLocation:
    """Ask ``provider`` for the current position, failing after ``timeout_ms``.

    Raises LocationError with reason unsupported, permission_denied,
    position_unavailable or timeout.
    """
    if provider is None:
        raise LocationError(LocationErrorReason.UNSUPPORTED)

    request = LocationRequest()
    try:
        provider.request_position(request)
    except LocationError as exc:
        request.reject(exc)
    location = await request.wait(timeout_ms)
    logger.info("Location obtained: %s,%s (accuracy %s)", location.lat, location.lng, location.accuracy)
    return location
