"""Event bus for state-change notifications.

A lightweight, synchronous publish/subscribe system. ``AppState`` publishes
an event after every action so any presentation layer can re-render from
the new state without the state knowing about it.

Usage::

    from photojournal.core.events import ENTRIES_CHANGED, Event, EventBus

    bus = EventBus()
    bus.on(ENTRIES_CHANGED, lambda event: print(event.payload))
    bus.emit(Event(name=ENTRIES_CHANGED, payload={"count": 3}, source="state"))
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any

from loguru import logger

# ---------------------------------------------------------------------------
# Well-known event names
# ---------------------------------------------------------------------------

ENTRIES_CHANGED = "entries.changed"
FILTER_CHANGED = "filter.changed"
DRAFT_CHANGED = "draft.changed"
APPEARANCE_CHANGED = "appearance.changed"

Hook = Callable[["Event"], None]


# ---------------------------------------------------------------------------
# Event model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Event:
    """An immutable event that flows through the bus."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time)
    source: str = ""


# ---------------------------------------------------------------------------
# EventBus
# ---------------------------------------------------------------------------


class EventBus:
    """Simple synchronous pub/sub event bus.

    Hooks run in registration order, specific hooks before wildcard hooks.
    A failing hook is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[Hook]] = defaultdict(list)
        self._wildcard_hooks: list[Hook] = []

    def on(self, event_name: str, hook: Hook) -> None:
        """Register *hook* for a specific event name."""
        self._hooks[event_name].append(hook)

    def on_all(self, hook: Hook) -> None:
        """Register *hook* for all events (wildcard)."""
        self._wildcard_hooks.append(hook)

    def off(self, event_name: str, hook: Hook) -> None:
        """Unregister *hook* from a specific event name."""
        try:
            self._hooks[event_name].remove(hook)
        except ValueError:
            pass

    def emit(self, event: Event) -> None:
        """Emit an event, running all matching hooks."""
        hooks = list(self._hooks.get(event.name, []))
        hooks.extend(self._wildcard_hooks)
        for hook in hooks:
            try:
                hook(event)
            except Exception as exc:
                logger.warning(f"Event hook failed for {event.name}: {exc}")
