"""Guidance layer — runs the pipeline and phrases the result for people."""

import math

from skyfield.units import Angle

from galacticcompass.compute import (
    SGR_A_STAR,
    compute_direction,
    normalize_degrees,
)
from galacticcompass.geocode import locate
from galacticcompass.i18n import t
from galacticcompass.models import (
    CelestialTarget,
    DirectionData,
    HorizontalPosition,
    QueryInput,
)

_CARDINAL_KEYS: tuple[str, ...] = (
    "north",
    "north_east",
    "east",
    "south_east",
    "south",
    "south_west",
    "west",
    "north_west",
)


def cardinal_name(azimuth_deg: float, lang: str = "en") -> str:
    """Long name of the 45° sector containing `azimuth_deg` ("North-East", ...)."""
    index = math.floor(normalize_degrees(azimuth_deg + 22.5) / 45.0)
    return t(_CARDINAL_KEYS[index % len(_CARDINAL_KEYS)], lang)


def describe_direction(position: HorizontalPosition, lang: str = "en") -> str:
    """One-sentence instruction: which way to face and how far to tilt.

    Negative altitudes read as "look down" by the same angle.
    """
    look = "look_up" if position.altitude_deg >= 0 else "look_down"
    return t("guidance", lang).format(
        cardinal=cardinal_name(position.azimuth_deg, lang),
        look=t(look, lang),
        angle=f"{abs(position.altitude_deg):.1f}",
    )


def format_target(target: CelestialTarget) -> str:
    """Name plus sexagesimal RA/Dec, e.g. "Sgr A* (RA 17h 45m 40.04s, Dec -29deg 00' 28.1\")"."""
    ra = Angle(hours=target.ra_deg / 15.0)
    dec = Angle(degrees=target.dec_deg)
    return f"{target.name} (RA {ra.hstr()}, Dec {dec.dstr()})"


def run(
    query: QueryInput, target: CelestialTarget = SGR_A_STAR
) -> DirectionData:
    """Top-level entry point: takes a QueryInput and returns a DirectionData.

    Args:
        query: User input (address, optional local time string).
        target: Object to point at. Defaults to Sagittarius A*.

    Returns:
        Fully computed DirectionData.

    Raises:
        GeocodingError: Place or timezone not found.
        InvalidInputError: Blank address or unusable time string.
    """
    context = locate(query.address, query.when)
    position = compute_direction(context.lat, context.lng, context.utc_dt, target)
    return DirectionData(context=context, target=target, position=position)
