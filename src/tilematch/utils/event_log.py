from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from tilematch.events.bus import EventBus, OUTBOUND_EVENTS


@dataclass(slots=True)
class EventRecorder:
    """Keeps an ordered replay log of events emitted on a bus.

    Renderers can drain it after each turn and animate the recorded steps at
    their own pace.
    """

    event_bus: EventBus
    names: Tuple[str, ...] = OUTBOUND_EVENTS
    entries: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in self.names:
            self.event_bus.subscribe(name, self._recorder_for(name))

    def _recorder_for(self, name: str):
        def record(sender, **payload):
            self.entries.append((name, dict(payload)))
        return record

    def event_names(self) -> List[str]:
        return [name for name, _ in self.entries]

    def of(self, name: str) -> List[Dict[str, Any]]:
        return [payload for entry_name, payload in self.entries if entry_name == name]

    def drain(self) -> List[Tuple[str, Dict[str, Any]]]:
        drained = list(self.entries)
        self.entries.clear()
        return drained

    def clear(self) -> None:
        self.entries.clear()


def record(event_bus: EventBus, names: Iterable[str] = OUTBOUND_EVENTS) -> EventRecorder:
    return EventRecorder(event_bus, tuple(names))
