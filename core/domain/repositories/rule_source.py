"""Rule source interface.

Rules are stored as rows whose ``conditions`` and ``actions`` columns hold
JSON-encoded text. Each backing store gets one implementation; the engine
only talks to this interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, List, Mapping, Optional


@dataclass(frozen=True)
class RuleRow:
    """Raw, unparsed rule as stored in the backing table."""

    id: str
    name: str
    trigger_type: str
    conditions: str = "{}"
    actions: str = "[]"
    priority: Any = 0
    enabled: Any = True
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    created_by: Optional[str] = None

    def with_changes(self, changes: Mapping[str, Any]) -> "RuleRow":
        """Return a copy with the given columns replaced."""
        return replace(self, **dict(changes))


class RuleSource(ABC):
    """Abstract storage for workflow rule rows."""

    @abstractmethod
    async def fetch_rows(self) -> List[RuleRow]:
        """Return all rule rows in insertion order.

        Returns:
            List of raw rule rows, including disabled ones
        """
        pass

    @abstractmethod
    async def get_row(self, rule_id: str) -> Optional[RuleRow]:
        """Retrieve a single row.

        Args:
            rule_id: Rule identifier

        Returns:
            RuleRow if found, None otherwise
        """
        pass

    @abstractmethod
    async def add_row(self, row: RuleRow) -> None:
        """Append a new rule row.

        Args:
            row: Row to append
        """
        pass

    @abstractmethod
    async def update_row(self, rule_id: str, changes: Mapping[str, Any]) -> bool:
        """Replace columns of an existing row.

        Args:
            rule_id: Rule identifier
            changes: Column name -> new value (already encoded)

        Returns:
            True if the row existed, False otherwise
        """
        pass

    @abstractmethod
    async def delete_row(self, rule_id: str) -> bool:
        """Remove a row.

        Args:
            rule_id: Rule identifier

        Returns:
            True if the row existed, False otherwise
        """
        pass
