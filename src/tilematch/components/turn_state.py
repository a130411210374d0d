from dataclasses import dataclass


@dataclass(slots=True)
class TurnState:
    """Tracks current turn-level state shared across systems."""

    turn_count: int = 0
    cascade_active: bool = False
    cascade_depth: int = 0
