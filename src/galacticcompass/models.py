"""Data model definitions — explicit boundaries between input, geocoding, compute, and display layers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    address: str  # Free-text place name ("Philadelphia, PA")
    when: str | None = None  # "YYYY-MM-DD HH:MM" local time at the place; None = now


@dataclass(frozen=True)
class GeocodeResult:
    """What the geocoder knows about a place."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    address_display: str  # Normalized address returned by geocoder (for display)
    timezone_name: str | None = None  # IANA name, when the geocoder annotates it
    timezone_offset_seconds: int | None = None  # UTC offset at query time, if known


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone conversion. Input to direction computation."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    utc_dt: datetime  # UTC datetime (with tzinfo=utc)
    address_display: str  # Normalized address returned by geocoder (for display)


@dataclass(frozen=True)
class ObserverLocation:
    """Validated observer position."""

    latitude: float  # -90..90
    longitude: float  # Normalized to [-180, 180)


@dataclass(frozen=True)
class CelestialTarget:
    """Fixed equatorial position (J2000) of a celestial object."""

    name: str
    ra_deg: float  # Right ascension (degrees, 0..360)
    dec_deg: float  # Declination (degrees, -90..90)


@dataclass(frozen=True)
class HorizontalPosition:
    """Where the target appears from the observer's horizon."""

    azimuth_deg: float  # [0, 360), clockwise from true north (0=N, 90=E, 180=S, 270=W)
    altitude_deg: float  # [-90, 90], negative below the horizon
    is_above_horizon: bool
    compass_label: str  # One of the 16 compass-rose points ("N", "NNE", ...)


@dataclass(frozen=True)
class DirectionData:
    """The sole input to display layers. Fully computed state."""

    context: ObserverContext
    target: CelestialTarget
    position: HorizontalPosition
