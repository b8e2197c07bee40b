"""
SQLAlchemy ORM Models.

Tables backing workflow rules and the execution history.
"""
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, DateTime, Integer, Text, Boolean, Index, JSON
)
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# WORKFLOW RULE MODEL
# =============================================================================

class WorkflowRuleModel(Base):
    """
    Workflow rule database model.
    
    ``conditions`` and ``actions`` hold JSON text exactly as submitted;
    decoding happens when rules are loaded. ``pk`` preserves insertion
    order.
    """
    
    __tablename__ = "workflow_rules"
    
    pk = Column(Integer, primary_key=True, autoincrement=True)
    rule_id = Column(String(64), unique=True, nullable=False, index=True)
    
    name = Column(String(255), nullable=False)
    trigger_type = Column(String(64), nullable=False, index=True)
    conditions = Column(Text, nullable=False, default="{}")
    actions = Column(Text, nullable=False, default="[]")
    priority = Column(Integer, nullable=False, default=0)
    enabled = Column(Boolean, nullable=False, default=True)
    
    created_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    last_modified = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    
    def __repr__(self):
        return f"<WorkflowRuleModel(rule_id={self.rule_id}, trigger={self.trigger_type})>"


# =============================================================================
# WORKFLOW HISTORY MODEL
# =============================================================================

class WorkflowHistoryModel(Base):
    """
    Execution history row, one per executed action.
    
    Append-only.
    """
    
    __tablename__ = "workflow_history"
    
    pk = Column(Integer, primary_key=True, autoincrement=True)
    record_id = Column(String(36), unique=True, nullable=False)
    
    case_id = Column(String(255), nullable=False, index=True)
    rule_id = Column(String(64), nullable=False)
    action_type = Column(String(64), nullable=False)
    old_value = Column(JSON, nullable=True)
    new_value = Column(JSON, nullable=True)
    executed_at = Column(DateTime(timezone=True), nullable=False)
    executed_by = Column(String(255), nullable=False, default="System")
    result = Column(String(16), nullable=False)
    notes = Column(Text, nullable=True)
    execution_id = Column(String(36), nullable=True, index=True)
    
    __table_args__ = (
        Index('ix_workflow_history_case_executed', 'case_id', 'executed_at'),
    )
    
    def __repr__(self):
        return f"<WorkflowHistoryModel(case_id={self.case_id}, action={self.action_type}, result={self.result})>"
