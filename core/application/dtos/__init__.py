"""Application DTOs."""

from .case_dto import CaseDTO, CaseUpsertDTO, ProcessRequestDTO
from .rule_dto import (
    ActionDTO,
    ExecutionRecordDTO,
    RuleCreateDTO,
    RuleDTO,
    RuleUpdateDTO,
)

__all__ = [
    "ActionDTO",
    "CaseDTO",
    "CaseUpsertDTO",
    "ExecutionRecordDTO",
    "ProcessRequestDTO",
    "RuleCreateDTO",
    "RuleDTO",
    "RuleUpdateDTO",
]
