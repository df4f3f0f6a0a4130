"""
Event Recorder

Append-only journal of state changes made through the issuance gate and
admin controls. The journal keeps the most recent events only; sequence
numbers keep counting past evicted entries.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
from typing import Any, Optional

from .models import EventKind, StateEvent


DEFAULT_MAX_EVENTS = 10_000


class EventLog:
    """
    Records state events in order.

    Usage:
        log = EventLog()
        log.record("paused", actor=admin)
        log.events("paused")
    """

    def __init__(self, max_events: Optional[int] = DEFAULT_MAX_EVENTS) -> None:
        if max_events is not None and max_events < 1:
            raise ValueError("max_events must be positive")
        self._events: deque[StateEvent] = deque(maxlen=max_events)
        self._next_sequence = 0

    @property
    def next_sequence(self) -> int:
        return self._next_sequence

    def record(self, kind: EventKind, *, actor: str, **payload: Any) -> StateEvent:
        event = StateEvent(
            sequence=self._next_sequence,
            kind=kind,
            actor=actor,
            payload=payload,
            recorded_at=datetime.now(timezone.utc),
        )
        self._events.append(event)
        self._next_sequence += 1
        return event

    def truncate(self, next_sequence: int) -> None:
        """Drop events numbered next_sequence and above (undo of a failed change)."""
        while self._events and self._events[-1].sequence >= next_sequence:
            self._events.pop()
        self._next_sequence = min(self._next_sequence, next_sequence)

    def events(self, kind: Optional[EventKind] = None) -> list[StateEvent]:
        """Get recorded events, optionally filtered by kind."""
        if kind is None:
            return list(self._events)
        return [e for e in self._events if e.kind == kind]

    def __len__(self) -> int:
        return len(self._events)
