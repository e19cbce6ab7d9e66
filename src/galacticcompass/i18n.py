"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "north": {"ko": "북쪽", "en": "North"},
    "north_east": {"ko": "북동쪽", "en": "North-East"},
    "east": {"ko": "동쪽", "en": "East"},
    "south_east": {"ko": "남동쪽", "en": "South-East"},
    "south": {"ko": "남쪽", "en": "South"},
    "south_west": {"ko": "남서쪽", "en": "South-West"},
    "west": {"ko": "서쪽", "en": "West"},
    "north_west": {"ko": "북서쪽", "en": "North-West"},
    "look_up": {
        "ko": "위로",
        "en": "up",
    },
    "look_down": {
        "ko": "아래로",
        "en": "down",
    },
    "guidance": {
        "ko": "{cardinal}을 바라보고 지평선에서 {angle}° {look} 보세요.",
        "en": "Face {cardinal} and look {look} {angle}° from the horizon.",
    },
    "label_place": {
        "ko": "장소",
        "en": "Location",
    },
    "label_time": {
        "ko": "시각(UTC)",
        "en": "Time (UTC)",
    },
    "label_target": {
        "ko": "목표",
        "en": "Target",
    },
    "label_azimuth": {
        "ko": "방위각",
        "en": "Azimuth",
    },
    "label_altitude": {
        "ko": "고도",
        "en": "Altitude",
    },
    "below_horizon": {
        "ko": "지금은 지평선 아래에 있어요.",
        "en": "It is below the horizon right now.",
    },
    "error_address": {
        "ko": "주소를 찾을 수 없어요. 더 구체적으로 입력해보세요. ({error})",
        "en": "Address not found. Try a more specific address. ({error})",
    },
    "error_input": {
        "ko": "입력값이 올바르지 않아요. ({error})",
        "en": "Invalid input. ({error})",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
