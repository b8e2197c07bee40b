"""Domain repository interfaces."""

from .execution_history import ExecutionHistory
from .rule_source import RuleRow, RuleSource

__all__ = ["ExecutionHistory", "RuleRow", "RuleSource"]
