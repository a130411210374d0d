from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps lambdas and bound methods of unreferenced systems alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT (gesture primitives, device agnostic)
# ============================================================================
EVENT_DRAG_START = "drag_start"    # payload: coord=(r,c), x=float, y=float
EVENT_DRAG_MOVE = "drag_move"      # payload: dx=float, dy=float
EVENT_DRAG_END = "drag_end"        # payload: None


# ============================================================================
# BOARD LIFECYCLE & CASCADE (outbound, one ordered transaction per turn)
# ============================================================================
EVENT_TILES_INITIALIZED = "tiles_initialized"  # payload: board=BoardSnapshot
EVENT_TILES_REMOVED = "tiles_removed"          # payload: ids=frozenset[int], depth=int
EVENT_COLUMN_COMPACTED = "column_compacted"    # payload: col=int, shift_map=dict[int,int], depth=int
EVENT_TILES_SPAWNED = "tiles_spawned"          # payload: col=int, tiles=list[Tile], depth=int
EVENT_BOARD_STABLE = "board_stable"            # payload: cascades=int

OUTBOUND_EVENTS = (
    EVENT_TILES_INITIALIZED,
    EVENT_TILES_REMOVED,
    EVENT_COLUMN_COMPACTED,
    EVENT_TILES_SPAWNED,
    EVENT_BOARD_STABLE,
)
