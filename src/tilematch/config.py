from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Tuple

from tilematch.constants import (
    DEFAULT_PALETTE,
    DRAG_THRESHOLD,
    GENERATION_RETRY_LIMIT,
    GRID_COLS,
    GRID_ROWS,
)
from tilematch.errors import ConfigurationError


def normalize_palette(kinds) -> Tuple[Hashable, ...]:
    # Preserve order while dropping duplicates.
    seen: set = set()
    ordered = []
    for kind in kinds:
        if kind in seen:
            continue
        seen.add(kind)
        ordered.append(kind)
    return tuple(ordered)


@dataclass(slots=True)
class EngineConfig:
    """Tunable surface of an engine instance.

    ``palette`` is an ordered set of opaque kind ids. Three or more kinds are
    recommended; smaller palettes are accepted but may fail generation.
    """

    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    palette: Tuple[Hashable, ...] = field(default=DEFAULT_PALETTE)
    drag_threshold: float = DRAG_THRESHOLD
    generation_retry_limit: int = GENERATION_RETRY_LIMIT

    def __post_init__(self) -> None:
        for name in ("rows", "cols", "generation_retry_limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        try:
            threshold = float(self.drag_threshold)
        except (TypeError, ValueError):
            raise ConfigurationError(f"drag_threshold must be a number, got {self.drag_threshold!r}") from None
        if threshold <= 0.0:
            raise ConfigurationError(f"drag_threshold must be positive, got {self.drag_threshold!r}")
        self.drag_threshold = threshold
        self.palette = normalize_palette(self.palette)
        if not self.palette:
            raise ConfigurationError("palette must contain at least one kind")
