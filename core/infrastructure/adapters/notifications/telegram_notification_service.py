"""
Telegram Notification Service Implementation.

Sends notifications via Telegram Bot API.
"""
import logging
import aiohttp

from core.application.interfaces import INotificationService
from core.settings.modules.integrations_settings import TelegramSettings


logger = logging.getLogger(__name__)


class TelegramNotificationService(INotificationService):
    """
    Telegram implementation of notification service.
    
    Messages go to the configured chat; the recipient is named in the text.
    """
    
    def __init__(self, settings: TelegramSettings):
        """
        Initialize Telegram notification service.
        
        Args:
            settings: Telegram settings with bot token and chat ID
        """
        self.settings = settings
        self.bot_token = settings.token
        self.chat_id = settings.chat_id
        self.prefix = settings.prefix
        self.min_severity = settings.min_severity
        self.api_url = f"https://api.telegram.org/bot{self.bot_token}/sendMessage"
        logger.info("TelegramNotificationService initialized")
    
    async def send(self, recipient: str, message: str, channel: str) -> bool:
        """Send a case notification via Telegram."""
        text = f"{self.prefix} *To:* `{recipient}`\n{message}"
        return await self._send_message(text)
    
    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message.
        
        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        if severity < self.min_severity:
            logger.debug(f"Notification severity {severity} below threshold {self.min_severity}, skipping")
            return
        
        emoji = "🔴" if severity >= 80 else "🟡" if severity >= 50 else "🟢"
        await self._send_message(f"{self.prefix} {emoji} {message}")
    
    async def _send_message(self, text: str) -> bool:
        """
        Send message to Telegram.
        
        Args:
            text: Message text (supports Markdown)
        
        Returns:
            True if the Bot API accepted the message
        """
        if not self.bot_token or not self.chat_id:
            logger.warning("Telegram bot_token or chat_id not configured, skipping notification")
            return False
        
        try:
            async with aiohttp.ClientSession() as session:
                payload = {
                    "chat_id": self.chat_id,
                    "text": text,
                    "parse_mode": "Markdown",
                }
                
                async with session.post(self.api_url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(
                            f"Telegram API error: {response.status} - {error_text}"
                        )
                        return False
                    logger.info("Telegram notification sent successfully")
                    return True
        except aiohttp.ClientError as e:
            logger.error(f"Failed to send Telegram notification: {e}", exc_info=True)
            return False
