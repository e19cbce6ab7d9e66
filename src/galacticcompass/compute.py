"""Celestial position layer — Julian Date, sidereal time, and horizontal coordinates.

Pure functions only. The transform follows Jean Meeus, *Astronomical
Algorithms* (2nd ed.): eq. 12.4 for mean sidereal time at Greenwich and
eq. 13.5/13.6 for hour angle + declination to azimuth/altitude. Meeus measures
azimuth westward from south; results here are rotated to the compass
convention (0=N, 90=E, 180=S, 270=W).
"""

import logging
import math
from datetime import datetime

from galacticcompass.models import (
    CelestialTarget,
    HorizontalPosition,
    ObserverLocation,
)

logger = logging.getLogger(__name__)

# Sagittarius A* (J2000): 17h45m40.04s, -29°00'28.1"
SGR_A_STAR = CelestialTarget(name="Sgr A*", ra_deg=266.41683, dec_deg=-29.00781)

COMPASS_LABELS: tuple[str, ...] = (
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
)  # fmt: skip

_JD_UNIX_EPOCH = 2440587.5  # Julian Date of 1970-01-01T00:00Z
_JD_J2000 = 2451545.0  # Julian Date of 2000-01-01T12:00 TT
_MS_PER_DAY = 86_400_000.0

Instant = datetime | int | float


class InvalidInputError(ValueError):
    """Non-finite, out-of-range, or otherwise unusable input."""


def normalize_degrees(angle: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = math.fmod(angle, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    # -1e-17 + 360.0 rounds to 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def normalize_longitude(longitude: float) -> float:
    """Wrap a longitude into [-180, 180). 190 and -170 map to the same value."""
    return normalize_degrees(longitude + 180.0) - 180.0


def _require_finite(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return float(value)


def validate_location(latitude: float, longitude: float) -> ObserverLocation:
    """Check observer coordinates and return them with longitude normalized.

    Raises:
        InvalidInputError: If either value is non-finite or latitude is outside [-90, 90].
    """
    lat = _require_finite("latitude", latitude)
    lng = _require_finite("longitude", longitude)
    if not -90.0 <= lat <= 90.0:
        raise InvalidInputError(f"latitude must be within [-90, 90], got {lat}")
    return ObserverLocation(latitude=lat, longitude=normalize_longitude(lng))


def julian_date(instant: Instant) -> float:
    """Julian Date of a UTC instant.

    Args:
        instant: Timezone-aware datetime, or milliseconds since the Unix epoch.

    Returns:
        Days since the Julian epoch origin; the fraction encodes time of day.

    Raises:
        InvalidInputError: For naive datetimes, non-finite numbers, or other types.
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise InvalidInputError(
                f"instant must be timezone-aware, got naive {instant.isoformat()}"
            )
        epoch_ms = instant.timestamp() * 1000.0
    else:
        epoch_ms = _require_finite("instant", instant)
    return epoch_ms / _MS_PER_DAY + _JD_UNIX_EPOCH


def greenwich_mean_sidereal_time(jd: float) -> float:
    """Greenwich Mean Sidereal Time in degrees, [0, 360) (Meeus eq. 12.4)."""
    d = jd - _JD_J2000
    t = d / 36525.0
    gmst = (
        280.46061837
        + 360.98564736629 * d
        + 0.000387933 * t * t
        - t * t * t / 38_710_000.0
    )
    return normalize_degrees(gmst)


def local_sidereal_time(gmst_deg: float, longitude_deg: float) -> float:
    """Local Sidereal Time in degrees, [0, 360). East longitudes are positive."""
    return normalize_degrees(gmst_deg + longitude_deg)


def hour_angle(lst_deg: float, ra_deg: float) -> float:
    """Hour angle in degrees, (-180, 180]. Positive west of the meridian."""
    ha = normalize_degrees(lst_deg - ra_deg)
    if ha > 180.0:
        ha -= 360.0
    return ha


def horizontal_from_hour_angle(
    hour_angle_deg: float, latitude_deg: float, declination_deg: float
) -> tuple[float, float]:
    """Convert hour angle + declination to (azimuth, altitude) in degrees.

    Azimuth is in [0, 360) clockwise from north. At the zenith the azimuth is
    undefined; a finite value is still returned.
    """
    h = math.radians(hour_angle_deg)
    phi = math.radians(latitude_deg)
    delta = math.radians(declination_deg)

    sin_alt = math.sin(delta) * math.sin(phi) + math.cos(delta) * math.cos(
        phi
    ) * math.cos(h)
    sin_alt = max(-1.0, min(1.0, sin_alt))

    # Meeus 13.5 with numerator and denominator scaled by cos(dec): no tan(dec) pole.
    # (y, x) = cos(alt) * (sin A, cos A), A measured westward from south.
    y = math.sin(h) * math.cos(delta)
    x = math.cos(h) * math.sin(phi) * math.cos(delta) - math.sin(delta) * math.cos(
        phi
    )
    # Same as asin(sin_alt), but keeps full precision near the zenith.
    altitude = math.degrees(math.atan2(sin_alt, math.hypot(x, y)))
    azimuth_from_south = math.degrees(math.atan2(y, x))
    azimuth = normalize_degrees(azimuth_from_south + 180.0)
    return azimuth, altitude


def compass_label(azimuth_deg: float) -> str:
    """Map an azimuth to one of 16 compass points, each a 22.5° sector centred on its label."""
    index = math.floor(normalize_degrees(azimuth_deg + 11.25) / 22.5)
    return COMPASS_LABELS[index % len(COMPASS_LABELS)]


def horizontal_position(
    location: ObserverLocation,
    instant: Instant,
    target: CelestialTarget = SGR_A_STAR,
) -> HorizontalPosition:
    """Compute where `target` appears for an already-validated observer location."""
    jd = julian_date(instant)
    gmst = greenwich_mean_sidereal_time(jd)
    lst = local_sidereal_time(gmst, location.longitude)
    ha = hour_angle(lst, target.ra_deg)
    azimuth, altitude = horizontal_from_hour_angle(
        ha, location.latitude, target.dec_deg
    )
    logger.debug(
        "%s: jd=%.6f gmst=%.6f lst=%.6f ha=%.6f az=%.6f alt=%.6f",
        target.name,
        jd,
        gmst,
        lst,
        ha,
        azimuth,
        altitude,
    )
    return HorizontalPosition(
        azimuth_deg=azimuth,
        altitude_deg=altitude,
        is_above_horizon=altitude > 0.0,
        compass_label=compass_label(azimuth),
    )


def compute_direction(
    latitude: float,
    longitude: float,
    instant: Instant,
    target: CelestialTarget = SGR_A_STAR,
) -> HorizontalPosition:
    """Top-level entry point: direction from an observer toward a fixed target.

    Args:
        latitude: Observer latitude in degrees, [-90, 90].
        longitude: Observer longitude in degrees, east positive. Any finite value; wrapped.
        instant: Timezone-aware datetime, or milliseconds since the Unix epoch (UTC).
        target: Equatorial coordinates to point at. Defaults to Sagittarius A*.

    Returns:
        HorizontalPosition with compass azimuth, altitude, and 16-point label.

    Raises:
        InvalidInputError: On non-finite or out-of-range input.
    """
    location = validate_location(latitude, longitude)
    return horizontal_position(location, instant, target)
