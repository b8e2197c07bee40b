"""Execution history sink interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.execution_record import ExecutionRecord


class ExecutionHistory(ABC):
    """Append-only store of workflow execution records."""

    @abstractmethod
    async def append(self, record: ExecutionRecord) -> None:
        """Persist one execution record.

        Args:
            record: Record to append
        """
        pass

    @abstractmethod
    async def list(self, case_id: Optional[str] = None, limit: int = 50) -> List[ExecutionRecord]:
        """Return records newest first.

        Args:
            case_id: Only records for this case when given
            limit: Maximum number of records

        Returns:
            List of execution records
        """
        pass
