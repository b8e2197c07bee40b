"""
DTOs for case snapshots and manual workflow processing.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.domain.enums import CasePriority, CaseStatus, TriggerType


class CaseUpsertDTO(BaseModel):
    """Request DTO for storing a case snapshot."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "New",
                "priority": "High",
                "assignee": None,
                "created_at": "2024-05-01T08:00:00Z",
                "fields": {"category": "billing", "customerEmail": "a@example.com"},
            }
        }
    )

    status: str = Field(..., min_length=1)
    priority: Optional[str] = None
    assignee: Optional[str] = None
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    fields: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in CaseStatus.values():
            raise ValueError(f"Unknown case status: {v}")
        return v

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in CasePriority.values():
            raise ValueError(f"Unknown case priority: {v}")
        return v


class CaseDTO(CaseUpsertDTO):
    """Response DTO for a stored case."""

    id: str


class ProcessRequestDTO(BaseModel):
    """Request DTO for running the engine against a stored case."""

    model_config = ConfigDict(populate_by_name=True)

    case_id: str = Field(..., alias="caseId", min_length=1)
    trigger_type: str = Field(..., alias="triggerType")
    context: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("trigger_type")
    @classmethod
    def validate_trigger_type(cls, v: str) -> str:
        if v not in TriggerType.values():
            raise ValueError(f"Unknown trigger type: {v}")
        return v
