"""
Event Models

Schemas for the state-change journal. Every accepted claim and every admin
mutation produces exactly one event; rejected operations produce none.

Key Design Principles:
1. sequence numbers are gap-free and strictly increasing
2. Timestamps are non-committed metadata
3. Payload values are JSON-safe (hex strings, decimal token ids)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


EventKind = Literal[
    "token_claimed",
    "root_updated",
    "paused",
    "unpaused",
    "metadata_location_updated",
    "admin_transferred",
]


class StateEvent(BaseModel):
    """A single recorded state change."""

    model_config = ConfigDict(extra="forbid")

    sequence: int = Field(
        ...,
        ge=0,
        description="Position of this event in the journal",
    )
    kind: EventKind = Field(
        ...,
        description="Type of state change",
    )
    actor: str = Field(
        ...,
        description="Checksummed address of the caller that caused the change",
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Event-specific data",
    )
    recorded_at: Optional[datetime] = Field(
        default=None,
        description="When the event was recorded (non-committed)",
    )
