"""Unit tests for the guidance layer and pipeline entry point."""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from galacticcompass.compute import SGR_A_STAR, InvalidInputError
from galacticcompass.geocode import GeocodingError
from galacticcompass.guidance import cardinal_name, describe_direction, format_target, run
from galacticcompass.i18n import t
from galacticcompass.models import (
    CelestialTarget,
    DirectionData,
    HorizontalPosition,
    ObserverContext,
    QueryInput,
)

PHILLY_CONTEXT = ObserverContext(
    lat=40.0,
    lng=-75.0,
    utc_dt=datetime(2025, 7, 1, 3, 0, tzinfo=timezone.utc),
    address_display="Philadelphia, Pennsylvania, United States of America",
)


def _position(azimuth, altitude):
    return HorizontalPosition(
        azimuth_deg=azimuth,
        altitude_deg=altitude,
        is_above_horizon=altitude > 0,
        compass_label="N",
    )


# ---------------------------------------------------------------------------
# cardinal_name
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "azimuth, name",
    [
        (0.0, "North"),
        (22.4, "North"),
        (22.5, "North-East"),
        (90.0, "East"),
        (130.1, "South-East"),
        (180.0, "South"),
        (225.0, "South-West"),
        (270.0, "West"),
        (315.0, "North-West"),
        (337.5, "North"),
        (359.9, "North"),
    ],
)
def test_cardinal_name(azimuth, name):
    assert cardinal_name(azimuth) == name


def test_cardinal_name_korean():
    assert cardinal_name(135.0, "ko") == "남동쪽"


# ---------------------------------------------------------------------------
# describe_direction
# ---------------------------------------------------------------------------


def test_describe_above_horizon():
    msg = describe_direction(_position(164.3, 19.2078))
    assert msg == "Face South and look up 19.2° from the horizon."


def test_describe_below_horizon():
    msg = describe_direction(_position(300.0, -42.07))
    assert msg == "Face North-West and look down 42.1° from the horizon."


def test_describe_korean():
    msg = describe_direction(_position(130.1, 0.78), lang="ko")
    assert msg == "남동쪽을 바라보고 지평선에서 0.8° 위로 보세요."


def test_describe_unknown_language_falls_back_to_english():
    msg = describe_direction(_position(90.0, 10.0), lang="fr")
    assert msg == "Face East and look up 10.0° from the horizon."


def test_i18n_missing_key_returns_key():
    assert t("no_such_key", "en") == "no_such_key"


# ---------------------------------------------------------------------------
# format_target
# ---------------------------------------------------------------------------


def test_format_target_sgr_a_star():
    text = format_target(SGR_A_STAR)
    assert text.startswith("Sgr A* (RA 17h 45m 40")
    assert "Dec -29" in text


def test_format_target_custom():
    text = format_target(CelestialTarget(name="Vega", ra_deg=279.23473, dec_deg=38.78369))
    assert text.startswith("Vega (RA 18h 36m")
    assert "Dec 38" in text


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


def test_run_returns_direction_data():
    with patch("galacticcompass.guidance.locate", return_value=PHILLY_CONTEXT) as mock_locate:
        data = run(QueryInput(address="Philadelphia", when="2025-06-30 23:00"))

    mock_locate.assert_called_once_with("Philadelphia", "2025-06-30 23:00")
    assert isinstance(data, DirectionData)
    assert data.context == PHILLY_CONTEXT
    assert data.target == SGR_A_STAR
    assert data.position.azimuth_deg == pytest.approx(164.29750073, abs=1e-6)
    assert data.position.altitude_deg == pytest.approx(19.20778387, abs=1e-6)
    assert data.position.compass_label == "SSE"


def test_run_with_custom_target():
    pole = CelestialTarget(name="NCP", ra_deg=0.0, dec_deg=90.0)
    with patch("galacticcompass.guidance.locate", return_value=PHILLY_CONTEXT):
        data = run(QueryInput(address="Philadelphia"), target=pole)
    assert data.target == pole
    assert data.position.altitude_deg == pytest.approx(40.0, abs=1e-6)


def test_run_propagates_errors():
    with patch("galacticcompass.guidance.locate", side_effect=GeocodingError("Address not found: x")):
        with pytest.raises(GeocodingError):
            run(QueryInput(address="x"))
    with patch("galacticcompass.guidance.locate", side_effect=InvalidInputError("bad time")):
        with pytest.raises(InvalidInputError):
            run(QueryInput(address="x", when="tomorrow"))
