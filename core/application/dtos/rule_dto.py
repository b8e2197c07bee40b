"""
DTOs for workflow rule administration.

Conditions and actions travel as structured payloads; they are validated
here before being JSON-encoded into the rule store.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.domain.enums import ActionType, ConditionOperator, TriggerType


def _validate_conditions(conditions: Dict[str, Any]) -> Dict[str, Any]:
    for field_name, condition in conditions.items():
        if isinstance(condition, dict):
            operator = condition.get("operator")
            if operator not in ConditionOperator.values():
                raise ValueError(
                    f"Unknown operator {operator!r} in condition on field {field_name!r}"
                )
            if "value" not in condition:
                raise ValueError(f"Condition on field {field_name!r} has no value")
    return conditions


# =============================================================================
# REQUEST DTOs
# =============================================================================

class ActionDTO(BaseModel):
    """One action of a rule definition."""

    model_config = ConfigDict(extra="forbid")

    type: str = Field(..., description="Action type")
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v not in ActionType.values():
            raise ValueError(f"Unknown action type: {v}")
        return v


class RuleCreateDTO(BaseModel):
    """Request DTO for creating a workflow rule."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Auto-assign new cases",
                "trigger_type": "status_change",
                "conditions": {"status": "New"},
                "actions": [
                    {"type": "change_status", "parameters": {"newStatus": "Assigned"}}
                ],
                "priority": 1,
                "enabled": True,
            }
        },
    )

    name: str = Field(..., min_length=1, max_length=255)
    trigger_type: str = Field(..., alias="triggerType")
    conditions: Dict[str, Any] = Field(default_factory=dict)
    actions: List[ActionDTO] = Field(..., min_length=1)
    priority: int = 0
    enabled: bool = True

    @field_validator("trigger_type")
    @classmethod
    def validate_trigger_type(cls, v: str) -> str:
        if v not in TriggerType.values():
            raise ValueError(f"Unknown trigger type: {v}")
        return v

    @field_validator("conditions")
    @classmethod
    def validate_conditions(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        return _validate_conditions(v)


class RuleUpdateDTO(BaseModel):
    """Request DTO for a partial rule update."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    trigger_type: Optional[str] = Field(default=None, alias="triggerType")
    conditions: Optional[Dict[str, Any]] = None
    actions: Optional[List[ActionDTO]] = None
    priority: Optional[int] = None
    enabled: Optional[bool] = None

    @field_validator("trigger_type")
    @classmethod
    def validate_trigger_type(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in TriggerType.values():
            raise ValueError(f"Unknown trigger type: {v}")
        return v

    @field_validator("conditions")
    @classmethod
    def validate_conditions(cls, v: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if v is None:
            return v
        return _validate_conditions(v)

    @field_validator("actions")
    @classmethod
    def validate_actions(cls, v: Optional[List[ActionDTO]]) -> Optional[List[ActionDTO]]:
        if v is not None and not v:
            raise ValueError("A rule must have at least one action")
        return v


# =============================================================================
# RESPONSE DTOs
# =============================================================================

class RuleDTO(BaseModel):
    """Response DTO describing a stored rule."""

    id: str
    name: str
    trigger_type: str
    conditions: Dict[str, Any]
    actions: List[Dict[str, Any]]
    priority: int
    enabled: bool
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    created_by: Optional[str] = None


class ExecutionRecordDTO(BaseModel):
    """Response DTO for one execution history entry."""

    id: str
    case_id: str
    rule_id: str
    action_type: str
    old_value: Any = None
    new_value: Any = None
    executed_at: datetime
    executed_by: str
    result: str
    notes: Optional[str] = None
    execution_id: Optional[str] = None
