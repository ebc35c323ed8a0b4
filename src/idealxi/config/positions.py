"""Closed enumerations for positions, play styles and ratings."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Tuple


POSITIONS: Tuple[str, ...] = (
    "PT",
    "DFC",
    "LI",
    "LD",
    "MCD",
    "MC",
    "MDI",
    "MDD",
    "MO",
    "EXI",
    "EXD",
    "SD",
    "DC",
)

_POSITION_GROUPS: Dict[str, Tuple[str, ...]] = {
    "Goalkeeper": ("PT",),
    "Defender": ("DFC", "LI", "LD"),
    "Midfielder": ("MCD", "MC", "MDI", "MDD", "MO"),
    "Forward": ("EXI", "EXD", "SD", "DC"),
}

PLAY_STYLES: Tuple[str, ...] = (
    "None",
    "Goal Poacher",
    "Dummy Runner",
    "Fox in the Box",
    "Target Man",
    "Creative Playmaker",
    "The Destroyer",
    "Defensive Goalkeeper",
    "Offensive Goalkeeper",
    "Extra Frontman",
    "Defensive Full-back",
    "Offensive Full-back",
    "Full-back Finisher",
    "Box-to-Box",
    "Anchor Man",
    "Orchestrator",
    "Hole Player",
    "Cross Specialist",
    "Roaming Flank",
    "Build Up",
    "Classic No. 10",
    "Deep-lying Forward",
    "Prolific Winger",
)

FORMATION_PLAY_STYLES: Tuple[str, ...] = (
    "Quick Counter",
    "Long Ball Counter",
    "Out Wide",
    "Long Ball",
    "Possession Game",
)

RATING_MIN = 1.0
RATING_MAX = 10.0
RATING_STEP = 0.5

# Read-only reverse lookup; every position belongs to exactly one group.
POSITION_GROUP: Mapping[str, str] = {
    position: group for group, members in _POSITION_GROUPS.items() for position in members
}

_STYLE_LOOKUP = {style.lower(): style for style in PLAY_STYLES}
_FORMATION_STYLE_LOOKUP = {style.lower(): style for style in FORMATION_PLAY_STYLES}


def normalize_position(position: str) -> str:
    """Return the canonical position code, raising ValueError if unknown."""

    key = position.strip().upper()
    if key not in POSITION_GROUP:
        raise ValueError(f"Unknown position {position!r}; expected one of {', '.join(POSITIONS)}")
    return key


def normalize_style(style: str | None) -> str:
    """Return the canonical play style; blank values map to ``"None"``."""

    if style is None or not style.strip():
        return "None"
    key = style.strip().lower()
    if key not in _STYLE_LOOKUP:
        raise ValueError(f"Unknown play style {style!r}")
    return _STYLE_LOOKUP[key]


def normalize_styles(styles: Iterable[str]) -> Tuple[str, ...]:
    normalized: list[str] = []
    for style in styles:
        value = normalize_style(style)
        if value not in normalized:
            normalized.append(value)
    return tuple(normalized)


def normalize_formation_style(style: str) -> str:
    key = style.strip().lower()
    if key not in _FORMATION_STYLE_LOOKUP:
        raise ValueError(
            f"Unknown formation play style {style!r}; expected one of {', '.join(FORMATION_PLAY_STYLES)}"
        )
    return _FORMATION_STYLE_LOOKUP[key]


def validate_rating(value: float) -> float:
    """Check a rating sits in [1, 10] on a half-point grid."""

    rating = float(value)
    if not RATING_MIN <= rating <= RATING_MAX:
        raise ValueError(f"Rating {value!r} outside {RATING_MIN:g}-{RATING_MAX:g}")
    if (rating / RATING_STEP) != int(rating / RATING_STEP):
        raise ValueError(f"Rating {value!r} must be a multiple of {RATING_STEP:g}")
    return rating


def get_position_group(position: str) -> str:
    """Fetch the group for a position code, raising KeyError if missing."""

    key = position.upper()
    if key not in POSITION_GROUP:
        raise KeyError(f"No position group configured for {position!r}")
    return POSITION_GROUP[key]
