from dataclasses import dataclass
from typing import Optional, Tuple

from tilematch.components.move import Move, Position

@dataclass(slots=True)
class GestureState:
    """Coordinate state for the single drag currently in progress.

    ``active_tile`` is the entity id under the pointer at drag start; it is
    only compared against the board, never dereferenced across a mutation.
    """
    active_tile: Optional[int] = None
    source: Optional[Position] = None
    origin: Tuple[float, float] = (0.0, 0.0)
    candidate: Optional[Move] = None

    @property
    def active(self) -> bool:
        return self.source is not None

    def clear(self) -> None:
        self.active_tile = None
        self.source = None
        self.origin = (0.0, 0.0)
        self.candidate = None
