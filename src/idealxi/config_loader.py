"""Persist and load CLI selection profiles, plus environment overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from idealxi.stats.performance import DEFAULT_RECENT_WINDOW


logger = logging.getLogger(__name__)

_RECENT_WINDOW_ENV = "IDEALXI_RECENT_WINDOW"


def env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def default_recent_window() -> int:
    return env_int(_RECENT_WINDOW_ENV, DEFAULT_RECENT_WINDOW, min_value=1)


@dataclass
class SelectionProfile:
    discarded_card_ids: List[str] = field(default_factory=list)
    recent_window: int = DEFAULT_RECENT_WINDOW

    @classmethod
    def load(cls, path: Path) -> "SelectionProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            discarded_card_ids=[str(card_id) for card_id in data.get("discarded_card_ids", [])],
            recent_window=int(data.get("recent_window", DEFAULT_RECENT_WINDOW)),
        )

    def save(self, path: Path) -> None:
        payload = {
            "discarded_card_ids": self.discarded_card_ids,
            "recent_window": self.recent_window,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
