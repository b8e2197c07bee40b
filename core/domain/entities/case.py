"""
Case snapshot.

The subset of case fields the workflow engine reads and writes. The case
itself is owned by an external case store.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional


_CORE_FIELDS = ("id", "status", "priority", "assignee", "created_at", "last_modified")


@dataclass
class CaseSnapshot:
    """Point-in-time view of a case."""
    id: str
    status: str
    priority: Optional[str] = None
    assignee: Optional[str] = None
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        """Read a core attribute or an additional field by name."""
        if name in _CORE_FIELDS:
            value = getattr(self, name)
            return default if value is None else value
        return self.fields.get(name, default)

    def apply(self, changes: Mapping[str, Any]) -> None:
        """Apply persisted changes so later actions see the current state."""
        for name, value in changes.items():
            if name in _CORE_FIELDS:
                setattr(self, name, value)
            else:
                self.fields[name] = value

    def as_dict(self) -> Dict[str, Any]:
        """Flatten core attributes and additional fields into one mapping."""
        data = dict(self.fields)
        for name in _CORE_FIELDS:
            data[name] = getattr(self, name)
        # Message templates refer to the case as {caseId}
        data.setdefault("caseId", self.id)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CaseSnapshot":
        extra = {k: v for k, v in data.items() if k not in _CORE_FIELDS}
        return cls(
            id=str(data["id"]),
            status=data.get("status"),
            priority=data.get("priority"),
            assignee=data.get("assignee"),
            created_at=data.get("created_at"),
            last_modified=data.get("last_modified"),
            fields=extra,
        )


@dataclass(frozen=True)
class CaseComment:
    """Comment appended to a case's comment log."""
    comment: str
    comment_type: str = "workflow"
    is_internal: bool = True
    author: str = "System"
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CaseUpdateResult:
    """Outcome of a case store write."""
    success: bool
    error: Optional[str] = None
