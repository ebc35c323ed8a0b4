"""Configuration helpers for positions, styles and formation presets."""

from .formations import FORMATION_SIZE, FormationPreset, get_preset, iter_presets, validate_formation_slots
from .positions import (
    FORMATION_PLAY_STYLES,
    PLAY_STYLES,
    POSITIONS,
    get_position_group,
    normalize_formation_style,
    normalize_position,
    normalize_style,
    normalize_styles,
    validate_rating,
)

__all__ = [
    "FORMATION_PLAY_STYLES",
    "FORMATION_SIZE",
    "FormationPreset",
    "PLAY_STYLES",
    "POSITIONS",
    "get_position_group",
    "get_preset",
    "iter_presets",
    "normalize_formation_style",
    "normalize_position",
    "normalize_style",
    "normalize_styles",
    "validate_formation_slots",
    "validate_rating",
]
