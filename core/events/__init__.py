"""
Core Events Module

Journal of claims and admin mutations, one event per committed change.
"""

from .models import EventKind, StateEvent
from .recorder import EventLog

__all__ = [
    "EventKind",
    "StateEvent",
    "EventLog",
]
