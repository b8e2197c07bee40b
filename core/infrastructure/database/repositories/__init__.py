"""SQLAlchemy-backed repositories."""
from .sqlalchemy_rule_source import SQLAlchemyRuleSource
from .sqlalchemy_execution_history import SQLAlchemyExecutionHistory

__all__ = ["SQLAlchemyRuleSource", "SQLAlchemyExecutionHistory"]
