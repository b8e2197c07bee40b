"""
Workflow rule aggregate.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Action:
    """
    One discrete automated effect of a rule.

    ``type`` is kept as the raw string from the rule payload; unknown types
    are reported when the action is executed, not when the rule is loaded.
    """
    type: str
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the parameter mapping so loaded rules stay read-only
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters or {})))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "parameters": dict(self.parameters)}


@dataclass(frozen=True)
class WorkflowRule:
    """
    Stored automation definition: trigger + conditions + ordered actions.

    Rules are loaded read-only by the engine. Higher ``priority`` runs first
    among rules matching the same trigger.
    """
    id: str
    name: str
    trigger_type: str
    conditions: Mapping[str, Any] = field(default_factory=dict)
    actions: Tuple[Action, ...] = ()
    priority: int = 0
    enabled: bool = True
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    created_by: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "conditions", MappingProxyType(dict(self.conditions or {})))
        object.__setattr__(self, "actions", tuple(self.actions or ()))

    @property
    def is_noop(self) -> bool:
        """An enabled rule without actions does nothing and must be flagged."""
        return self.enabled and not self.actions

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "trigger_type": self.trigger_type,
            "conditions": dict(self.conditions),
            "actions": [action.to_dict() for action in self.actions],
            "priority": self.priority,
            "enabled": self.enabled,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_modified": self.last_modified.isoformat() if self.last_modified else None,
            "created_by": self.created_by,
        }
