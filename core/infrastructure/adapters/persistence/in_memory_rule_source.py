"""
In-memory Rule Source Implementation.

Rows keep insertion order, which is the tie-break order for rules of equal
priority.
"""
from typing import Any, Dict, List, Mapping, Optional
import logging

from core.domain.repositories import RuleRow, RuleSource


logger = logging.getLogger(__name__)


class InMemoryRuleSource(RuleSource):
    """In-memory implementation of RuleSource."""
    
    def __init__(self, rows: Optional[List[RuleRow]] = None):
        self._rows: Dict[str, RuleRow] = {}
        self.fetch_count = 0
        for row in rows or []:
            self._rows[row.id] = row
    
    async def fetch_rows(self) -> List[RuleRow]:
        self.fetch_count += 1
        return list(self._rows.values())
    
    async def get_row(self, rule_id: str) -> Optional[RuleRow]:
        return self._rows.get(rule_id)
    
    async def add_row(self, row: RuleRow) -> None:
        self._rows[row.id] = row
        logger.info(f"Rule row added: {row.id}")
    
    async def update_row(self, rule_id: str, changes: Mapping[str, Any]) -> bool:
        row = self._rows.get(rule_id)
        if row is None:
            return False
        self._rows[rule_id] = row.with_changes(changes)
        return True
    
    async def delete_row(self, rule_id: str) -> bool:
        return self._rows.pop(rule_id, None) is not None
