"""
In-memory Case Store Implementation.

Keeps cases in a dictionary. Writes are serialized per case id and an
optional ``expected_last_modified`` check rejects stale writes.
"""
import asyncio
import copy
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from core.application.interfaces import ICaseStore
from core.domain.entities import CaseComment, CaseSnapshot, CaseUpdateResult
from core.domain.enums import CLOSED_STATUSES, INACTIVE_STATUSES, CasePriority
from core.domain.exceptions import StaleWriteError


logger = logging.getLogger(__name__)


class InMemoryCaseStore(ICaseStore):
    """
    In-memory implementation of ICaseStore.
    
    Snapshots handed out are copies, so callers never share state with
    the store.
    """
    
    def __init__(self, cases: Optional[List[CaseSnapshot]] = None):
        """Initialize storage, optionally seeded with cases."""
        self._cases: Dict[str, CaseSnapshot] = {}
        self._comments: Dict[str, List[CaseComment]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self.update_log: List[Dict[str, Any]] = []
        for case in cases or []:
            self.add_case(case)
    
    def _lock_for(self, case_id: str) -> asyncio.Lock:
        if case_id not in self._locks:
            self._locks[case_id] = asyncio.Lock()
        return self._locks[case_id]
    
    def add_case(self, case: CaseSnapshot) -> None:
        """Insert or replace a case (for demo/testing)."""
        self._cases[case.id] = copy.deepcopy(case)
    
    def get(self, case_id: str) -> Optional[CaseSnapshot]:
        """Synchronous copy of a stored case (for demo/testing)."""
        case = self._cases.get(case_id)
        return copy.deepcopy(case) if case else None
    
    def comments_for(self, case_id: str) -> List[CaseComment]:
        return list(self._comments.get(case_id, []))
    
    async def read_case(self, case_id: str) -> Optional[CaseSnapshot]:
        return self.get(case_id)
    
    async def update_case(
        self,
        case_id: str,
        fields: Dict[str, Any],
        expected_last_modified: Optional[datetime] = None,
    ) -> CaseUpdateResult:
        async with self._lock_for(case_id):
            stored = self._cases.get(case_id)
            if stored is None:
                logger.warning(f"Update for unknown case {case_id}")
                return CaseUpdateResult(success=False, error=f"Case not found: {case_id}")
            
            if expected_last_modified is not None and stored.last_modified != expected_last_modified:
                logger.warning(
                    f"Stale write to case {case_id}: expected {expected_last_modified}, "
                    f"stored {stored.last_modified}"
                )
                raise StaleWriteError(case_id)
            
            stored.apply(copy.deepcopy(fields))
            self.update_log.append({"case_id": case_id, "fields": dict(fields)})
            logger.debug(f"Case {case_id} updated: {sorted(fields)}")
            return CaseUpdateResult(success=True)
    
    async def append_comment(self, case_id: str, comment: CaseComment) -> CaseUpdateResult:
        if case_id not in self._cases:
            return CaseUpdateResult(success=False, error=f"Case not found: {case_id}")
        self._comments.setdefault(case_id, []).append(comment)
        return CaseUpdateResult(success=True)
    
    async def list_active_cases(self) -> List[CaseSnapshot]:
        return [
            copy.deepcopy(case)
            for case in self._cases.values()
            if case.status not in INACTIVE_STATUSES
        ]
    
    async def list_cases_eligible_for_escalation(self) -> List[CaseSnapshot]:
        """Open cases that are not already at the highest priority."""
        return [
            copy.deepcopy(case)
            for case in self._cases.values()
            if case.status not in CLOSED_STATUSES and case.priority != CasePriority.CRITICAL
        ]
    
    def clear(self) -> None:
        """Clear all cases (for demo/testing)."""
        self._cases.clear()
        self._comments.clear()
        self.update_log.clear()
