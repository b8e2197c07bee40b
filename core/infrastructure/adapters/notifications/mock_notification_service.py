"""
Mock Notification Service Implementation.

This simulates notifications for testing and demos.
"""
from typing import Iterable, Optional
import logging

from core.application.interfaces import INotificationService


logger = logging.getLogger(__name__)


class MockNotificationService(INotificationService):
    """
    Mock implementation of notification service.
    
    Logs notifications instead of actually sending them.
    Recipients listed in ``failing_recipients`` are rejected, which lets
    tests exercise partial notification failure.
    """
    
    def __init__(self, failing_recipients: Optional[Iterable[str]] = None):
        """Initialize mock notification service."""
        self.notifications_sent = []
        self.failing_recipients = set(failing_recipients or [])
        logger.info("MockNotificationService initialized (console logging)")
    
    async def send(self, recipient: str, message: str, channel: str) -> bool:
        """
        Record a notification.
        
        Args:
            recipient: Recipient address or identifier
            message: Rendered message text
            channel: Channel name
        
        Returns:
            False for recipients configured to fail, True otherwise
        """
        if recipient in self.failing_recipients:
            logger.warning(f"🔔 Notification to {recipient} via {channel} rejected")
            return False
        
        self.notifications_sent.append({
            "type": "message",
            "recipient": recipient,
            "channel": channel,
            "message": message,
        })
        logger.info(
            f"🔔 NOTIFICATION:\n"
            f"   To: {recipient} ({channel})\n"
            f"   Message: {message}"
        )
        return True
    
    async def notify(self, message: str, severity: int = 50) -> None:
        """Record a generic operational notification."""
        self.notifications_sent.append({
            "type": "notify",
            "message": message,
            "severity": severity,
        })
        logger.info(f"🔔 NOTIFY (severity={severity}): {message}")
