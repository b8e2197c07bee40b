"""
Slack Notification Service Implementation.

Sends notifications via Slack Webhook API.
"""
import logging
import aiohttp

from core.application.interfaces import INotificationService
from core.settings.modules.integrations_settings import SlackSettings


logger = logging.getLogger(__name__)


class SlackNotificationService(INotificationService):
    """
    Slack implementation of notification service.
    
    The webhook decides the target channel, so the recipient is mentioned
    in the message body.
    """
    
    def __init__(self, settings: SlackSettings):
        """
        Initialize Slack notification service.
        
        Args:
            settings: Slack settings with webhook URL
        """
        self.settings = settings
        self.webhook_url = settings.webhook_url
        self.prefix = settings.prefix
        logger.info("SlackNotificationService initialized")
    
    async def send(self, recipient: str, message: str, channel: str) -> bool:
        """Send a case notification via Slack."""
        text = f"{self.prefix} *To:* `{recipient}`\n{message}"
        return await self._send_message(text, color="good")
    
    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message.
        
        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        color = "danger" if severity >= 80 else "warning" if severity >= 50 else "good"
        await self._send_message(f"{self.prefix} {message}", color=color)
    
    async def _send_message(self, text: str, color: str = "good") -> bool:
        """
        Send message to Slack.
        
        Args:
            text: Message text
            color: Attachment color (good, warning, danger)
        
        Returns:
            True if Slack accepted the message
        """
        if not self.webhook_url:
            logger.warning("Slack webhook_url not configured, skipping notification")
            return False
        
        try:
            async with aiohttp.ClientSession() as session:
                payload = {
                    "attachments": [
                        {
                            "color": color,
                            "text": text,
                            "mrkdwn_in": ["text"],
                        }
                    ]
                }
                
                async with session.post(self.webhook_url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(
                            f"Slack API error: {response.status} - {error_text}"
                        )
                        return False
                    logger.info("Slack notification sent successfully")
                    return True
        except aiohttp.ClientError as e:
            logger.error(f"Failed to send Slack notification: {e}", exc_info=True)
            return False
