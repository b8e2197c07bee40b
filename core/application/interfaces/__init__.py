"""Application layer interfaces."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.domain.entities import CaseComment, CaseSnapshot, CaseUpdateResult, Followup


class ICaseStore(ABC):
    """
    Interface for the external case store.
    
    The store is shared with sweeps and event-triggered runs that may
    overlap, so it is responsible for serializing writes per case or for
    rejecting stale writes. The engine holds no locks of its own.
    """
    
    @abstractmethod
    async def read_case(self, case_id: str) -> Optional[CaseSnapshot]:
        """
        Read the current snapshot of a case.
        
        Args:
            case_id: Case identifier
        
        Returns:
            CaseSnapshot if found, None otherwise
        """
        pass
    
    @abstractmethod
    async def update_case(
        self,
        case_id: str,
        fields: Dict[str, Any],
        expected_last_modified: Optional[datetime] = None,
    ) -> CaseUpdateResult:
        """
        Persist a partial update of a case.
        
        Args:
            case_id: Case identifier
            fields: Field name -> new value
            expected_last_modified: When given, the write is rejected if the
                stored ``last_modified`` differs (optimistic check)
        
        Returns:
            CaseUpdateResult with success flag and optional error
        """
        pass
    
    @abstractmethod
    async def append_comment(self, case_id: str, comment: CaseComment) -> CaseUpdateResult:
        """
        Append a comment to the case's comment log.
        
        Args:
            case_id: Case identifier
            comment: Comment record
        
        Returns:
            CaseUpdateResult with success flag
        """
        pass
    
    @abstractmethod
    async def list_active_cases(self) -> List[CaseSnapshot]:
        """Return all cases that periodic checks should look at."""
        pass
    
    @abstractmethod
    async def list_cases_eligible_for_escalation(self) -> List[CaseSnapshot]:
        """Return open cases the daily escalation sweep should look at."""
        pass


class INotificationService(ABC):
    """
    Interface for notification service operations.
    
    This interface defines the contract for sending notifications,
    allowing different implementations (email, Slack, Telegram, etc.)
    """
    
    @abstractmethod
    async def send(self, recipient: str, message: str, channel: str) -> bool:
        """
        Dispatch one message to one recipient on one channel.
        
        Args:
            recipient: Recipient address (email, chat handle, ...)
            message: Fully formatted message text
            channel: Channel name (email, slack, telegram, ...)
        
        Returns:
            True if the transport accepted the message
        """
        pass
    
    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic operational notification.
        
        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        # Default implementation - can be overridden
        pass


class IFollowupScheduler(ABC):
    """Interface for the external follow-up scheduling collaborator."""
    
    @abstractmethod
    async def schedule(self, followup: Followup) -> bool:
        """
        Hand a follow-up over to the scheduling system.
        
        Args:
            followup: Follow-up record
        
        Returns:
            True if the follow-up was accepted
        """
        pass


__all__ = ["ICaseStore", "INotificationService", "IFollowupScheduler"]
