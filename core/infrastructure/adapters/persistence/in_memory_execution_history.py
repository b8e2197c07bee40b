"""
In-memory Execution History Implementation.
"""
from typing import List, Optional

from core.domain.entities import ExecutionRecord
from core.domain.repositories import ExecutionHistory


class InMemoryExecutionHistory(ExecutionHistory):
    """Append-only list of execution records."""
    
    def __init__(self):
        self._records: List[ExecutionRecord] = []
    
    @property
    def records(self) -> List[ExecutionRecord]:
        """All records in append order (for testing)."""
        return list(self._records)
    
    async def append(self, record: ExecutionRecord) -> None:
        self._records.append(record)
    
    async def list(self, case_id: Optional[str] = None, limit: int = 50) -> List[ExecutionRecord]:
        matching = [r for r in self._records if case_id is None or r.case_id == case_id]
        # Newest first; equal timestamps keep reverse append order
        matching.reverse()
        matching.sort(key=lambda r: r.executed_at, reverse=True)
        return matching[:limit]
