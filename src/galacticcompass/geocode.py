"""Geocoding and clock layer — place names to coordinates, local wall time to UTC."""

import logging
import os
from datetime import datetime

import httpx
from pytz import FixedOffset, timezone, utc
from pytz.exceptions import (
    AmbiguousTimeError,
    NonExistentTimeError,
    UnknownTimeZoneError,
)
from timezonefinder import TimezoneFinder

from galacticcompass.compute import InvalidInputError
from galacticcompass.models import GeocodeResult, ObserverContext

logger = logging.getLogger(__name__)

_OPENCAGE_URL = "https://api.opencagedata.com/geocode/v1/json"
_NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
_USER_AGENT = "GalacticCompass/1.0"
_WHEN_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M")

_tf = TimezoneFinder()


class GeocodingError(Exception):
    """Geocoder call failure."""


def _json_body(resp: httpx.Response, provider: str):
    """Decode a provider response; HTML error or captcha pages become GeocodingError."""
    try:
        return resp.json()
    except ValueError as e:
        raise GeocodingError(f"{provider} returned a non-JSON response") from e


def _geocode_opencage(address: str, api_key: str) -> GeocodeResult | None:
    """Single OpenCage call. Returns None when nothing matches, raises on API error."""
    params = {"q": address, "key": api_key, "limit": 1}
    resp = httpx.get(_OPENCAGE_URL, params=params, timeout=10)
    resp.raise_for_status()
    data = _json_body(resp, "OpenCage")
    status = data.get("status", {})
    if status.get("code", 200) != 200:
        raise GeocodingError(f"OpenCage error: {status.get('message', status)}")
    results = data.get("results") or []
    if not results:
        return None
    r = results[0]
    tz = r.get("annotations", {}).get("timezone", {})
    offset = tz.get("offset_sec")
    return GeocodeResult(
        lat=float(r["geometry"]["lat"]),
        lng=float(r["geometry"]["lng"]),
        address_display=r.get("formatted", address),
        timezone_name=tz.get("name"),
        timezone_offset_seconds=int(offset) if offset is not None else None,
    )


def _geocode_nominatim(address: str) -> GeocodeResult | None:
    """Nominatim (OpenStreetMap) geocoder. Returns None when nothing matches."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": _USER_AGENT}
    resp = httpx.get(_NOMINATIM_URL, params=params, headers=headers, timeout=10)
    resp.raise_for_status()
    results = _json_body(resp, "Nominatim")
    if not results:
        return None
    r = results[0]
    return GeocodeResult(
        lat=float(r["lat"]), lng=float(r["lon"]), address_display=r["display_name"]
    )


def geocode_place(address: str) -> GeocodeResult:
    """Resolve a free-text place name to coordinates.

    Uses OpenCage when OPENCAGE_API_KEY is set, falling back to Nominatim on
    OpenCage failure. Without a key, Nominatim is used directly.

    Args:
        address: Place name in any language.

    Returns:
        GeocodeResult with lat/lng, display address, and timezone hints if known.

    Raises:
        InvalidInputError: If the address is blank.
        GeocodingError: When the place cannot be found.
    """
    if not address or not address.strip():
        raise InvalidInputError("address must not be empty")
    address = address.strip()

    api_key = os.environ.get("OPENCAGE_API_KEY")
    if api_key:
        logger.info("Geocoding request for: %s", address)
        try:
            result = _geocode_opencage(address, api_key)
            if result is not None:
                return result
            logger.info("No OpenCage results for %s, trying Nominatim", address)
        except (GeocodingError, httpx.HTTPError) as e:
            logger.warning("OpenCage failed for %s, trying Nominatim: %s", address, e)

    try:
        result = _geocode_nominatim(address)
    except httpx.HTTPError as e:
        raise GeocodingError(f"Geocoder unavailable: {e}") from e
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    logger.info("Geocoded %s -> (%.4f, %.4f)", address, result.lat, result.lng)
    return result


def _parse_when(when: str) -> datetime:
    for fmt in _WHEN_FORMATS:
        try:
            return datetime.strptime(when.strip(), fmt)
        except ValueError:
            continue
    raise InvalidInputError(f"Unrecognized date/time {when!r}, expected YYYY-MM-DD HH:MM")


def _place_timezone(place: GeocodeResult):
    """Pick a pytz timezone for the place: geocoder name, then lookup, then fixed offset."""
    if place.timezone_name:
        try:
            return timezone(place.timezone_name)
        except UnknownTimeZoneError:
            logger.warning(
                "Unknown timezone %r from geocoder, looking it up", place.timezone_name
            )
    tz_str = _tf.timezone_at(lat=place.lat, lng=place.lng)
    if tz_str is not None:
        return timezone(tz_str)
    if place.timezone_offset_seconds is not None:
        return FixedOffset(place.timezone_offset_seconds // 60)
    raise GeocodingError(f"Timezone not found: lat={place.lat}, lng={place.lng}")


def resolve_instant(
    when: str | None, place: GeocodeResult, now: datetime | None = None
) -> datetime:
    """Turn a local wall-clock string at `place` into an aware UTC datetime.

    Args:
        when: Local time in "YYYY-MM-DD HH:MM" (or "YYYY-MM-DDTHH:MM") format.
            None means "now".
        place: Geocoded place providing the timezone.
        now: Clock override used when `when` is None. Defaults to the system clock.

    Raises:
        InvalidInputError: Unparseable, ambiguous, or non-existent local time.
        GeocodingError: When no timezone can be determined for the place.
    """
    if when is None:
        return (now or datetime.now(utc)).astimezone(utc)

    dt = _parse_when(when)
    local_tz = _place_timezone(place)
    try:
        local_dt = local_tz.localize(dt, is_dst=None)
    except (AmbiguousTimeError, NonExistentTimeError) as e:
        raise InvalidInputError(
            f"Local time {when} is ambiguous or skipped in {local_tz.zone}"
        ) from e
    return local_dt.astimezone(utc)


def locate(address: str, when: str | None) -> ObserverContext:
    """Resolve an address and time string to an ObserverContext."""
    place = geocode_place(address)
    utc_dt = resolve_instant(when, place)
    return ObserverContext(
        lat=place.lat,
        lng=place.lng,
        utc_dt=utc_dt,
        address_display=place.address_display,
    )
