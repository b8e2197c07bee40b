"""
Execution Status Enum.

Outcome values written to the workflow execution history.
"""
from enum import Enum


class ExecutionStatus(str, Enum):
    """Execution status values."""
    
    SUCCESS = "Success"
    FAILED = "Failed"

    @classmethod
    def from_bool(cls, success: bool) -> "ExecutionStatus":
        return cls.SUCCESS if success else cls.FAILED
