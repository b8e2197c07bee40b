"""
In-memory Follow-up Scheduler Implementation.

Scheduling the same follow-up twice keeps a single entry.
"""
from typing import Dict, List
import logging

from core.application.interfaces import IFollowupScheduler
from core.domain.entities import Followup


logger = logging.getLogger(__name__)


class InMemoryFollowupScheduler(IFollowupScheduler):
    """Stores follow-ups keyed by (case, date, type)."""
    
    def __init__(self):
        self._followups: Dict[tuple, Followup] = {}
    
    @property
    def followups(self) -> List[Followup]:
        return list(self._followups.values())
    
    async def schedule(self, followup: Followup) -> bool:
        if followup.key in self._followups:
            logger.debug(f"Follow-up already scheduled for case {followup.case_id}")
            return True
        self._followups[followup.key] = followup
        logger.info(
            f"Follow-up scheduled for case {followup.case_id} at "
            f"{followup.followup_date.isoformat()} ({followup.followup_type})"
        )
        return True
