"""Formation presets and slot validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Sequence, Tuple

from idealxi.config.positions import normalize_position, normalize_styles
from idealxi.models import FormationSlot


FORMATION_SIZE = 11


@dataclass(frozen=True)
class FormationPreset:
    name: str
    positions: Tuple[str, ...]

    def slots(self) -> Tuple[FormationSlot, ...]:
        return tuple(FormationSlot(position=position) for position in self.positions)


_PRESETS: Dict[str, FormationPreset] = {
    "4-3-3": FormationPreset(
        name="4-3-3",
        positions=("PT", "LI", "DFC", "DFC", "LD", "MCD", "MC", "MC", "EXI", "DC", "EXD"),
    ),
    "4-4-2": FormationPreset(
        name="4-4-2",
        positions=("PT", "LI", "DFC", "DFC", "LD", "MDI", "MC", "MC", "MDD", "DC", "DC"),
    ),
    "4-2-3-1": FormationPreset(
        name="4-2-3-1",
        positions=("PT", "LI", "DFC", "DFC", "LD", "MCD", "MCD", "MDI", "MO", "MDD", "DC"),
    ),
    "3-4-3": FormationPreset(
        name="3-4-3",
        positions=("PT", "DFC", "DFC", "DFC", "MDI", "MC", "MC", "MDD", "EXI", "DC", "EXD"),
    ),
    "5-3-2": FormationPreset(
        name="5-3-2",
        positions=("PT", "LI", "DFC", "DFC", "DFC", "LD", "MC", "MCD", "MC", "DC", "DC"),
    ),
}


def iter_presets() -> Iterable[FormationPreset]:
    """Return an iterator of all configured presets."""

    return _PRESETS.values()


def get_preset(name: str) -> FormationPreset:
    """Fetch a preset by name, raising KeyError if missing."""

    key = name.strip()
    if key not in _PRESETS:
        raise KeyError(f"No formation preset named {name!r}")
    return _PRESETS[key]


def validate_formation_slots(slots: Sequence[FormationSlot | Mapping[str, object]]) -> Tuple[FormationSlot, ...]:
    """Normalize slots and enforce the eleven-slot shape selection relies on."""

    if len(slots) != FORMATION_SIZE:
        raise ValueError(f"Formation must have exactly {FORMATION_SIZE} slots, got {len(slots)}")

    validated: list[FormationSlot] = []
    for index, slot in enumerate(slots):
        if isinstance(slot, FormationSlot):
            position, styles = slot.position, slot.styles
        elif not isinstance(slot, Mapping):
            raise ValueError(f"Slot {index + 1}: expected an object with a position, got {slot!r}")
        else:
            position = str(slot.get("position", ""))
            styles = slot.get("styles") or ()
            if isinstance(styles, str):
                styles = (styles,)
        try:
            validated.append(
                FormationSlot(position=normalize_position(position), styles=normalize_styles(styles))
            )
        except ValueError as exc:
            raise ValueError(f"Slot {index + 1}: {exc}") from exc
    return tuple(validated)
