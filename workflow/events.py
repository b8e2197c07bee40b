"""Workflow events - Event, EventMetadata."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class EventMetadata:
    """Metadata for an event."""

    execution_id: str
    case_id: str
    trigger_type: str
    timestamp: datetime


@dataclass
class Event:
    """Event published by the workflow engine."""

    name: str
    payload: dict[str, object]
    metadata: EventMetadata


RULE_EXECUTED = "workflow.rule.executed"
CASE_PROCESSED = "workflow.processed"
