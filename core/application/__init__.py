"""Application layer - services, interfaces, and DTOs.

Services are imported from ``core.application.services`` directly; they
depend on the ``workflow`` package, which itself imports the interfaces
defined here.
"""

from .dtos import ActionDTO, ExecutionRecordDTO, RuleCreateDTO, RuleDTO, RuleUpdateDTO
from .interfaces import ICaseStore, IFollowupScheduler, INotificationService

__all__ = [
    # DTOs
    "ActionDTO",
    "ExecutionRecordDTO",
    "RuleCreateDTO",
    "RuleDTO",
    "RuleUpdateDTO",
    # Interfaces
    "ICaseStore",
    "IFollowupScheduler",
    "INotificationService",
]
