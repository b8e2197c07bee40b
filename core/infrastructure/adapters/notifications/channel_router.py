"""
Channel router.

Routes ``send`` calls to the service registered for the requested channel.
"""
from typing import Dict
import logging

from core.application.interfaces import INotificationService


logger = logging.getLogger(__name__)


class ChannelRouterNotificationService(INotificationService):
    """Dispatches by channel name; unknown channels are rejected."""
    
    def __init__(self, services: Dict[str, INotificationService]):
        self.services = dict(services)
    
    def register(self, channel: str, service: INotificationService) -> None:
        self.services[channel] = service
    
    async def send(self, recipient: str, message: str, channel: str) -> bool:
        service = self.services.get(channel)
        if service is None:
            logger.warning(f"No notification service for channel '{channel}'")
            return False
        return await service.send(recipient, message, channel)
    
    async def notify(self, message: str, severity: int = 50) -> None:
        # One service may back several channels; alert it once
        seen: set[int] = set()
        for service in self.services.values():
            if id(service) in seen:
                continue
            seen.add(id(service))
            await service.notify(message, severity)
