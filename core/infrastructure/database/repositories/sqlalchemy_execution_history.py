"""
SQLAlchemy Execution History Implementation.

Append-only sink over the ``workflow_history`` table.
"""
from typing import List, Optional
import logging
from sqlalchemy import select

from casedesk_sdk.utils.datetime import ensure_utc
from core.domain.entities import ExecutionRecord
from core.domain.enums import ExecutionStatus
from core.domain.repositories import ExecutionHistory
from core.infrastructure.database.models import WorkflowHistoryModel


logger = logging.getLogger(__name__)


class SQLAlchemyExecutionHistory(ExecutionHistory):
    """
    SQLAlchemy implementation of ExecutionHistory.
    """
    
    def __init__(self, session_factory):
        self.session_factory = session_factory
    
    async def append(self, record: ExecutionRecord) -> None:
        async with self.session_factory() as session:
            session.add(WorkflowHistoryModel(
                record_id=record.id,
                case_id=record.case_id,
                rule_id=record.rule_id,
                action_type=record.action_type,
                old_value=record.old_value,
                new_value=record.new_value,
                executed_at=record.executed_at,
                executed_by=record.executed_by,
                result=record.result.value,
                notes=record.notes,
                execution_id=record.execution_id,
            ))
            await session.commit()
    
    async def list(self, case_id: Optional[str] = None, limit: int = 50) -> List[ExecutionRecord]:
        query = select(WorkflowHistoryModel)
        if case_id is not None:
            query = query.where(WorkflowHistoryModel.case_id == case_id)
        query = query.order_by(
            WorkflowHistoryModel.executed_at.desc(),
            WorkflowHistoryModel.pk.desc(),
        ).limit(limit)
        
        async with self.session_factory() as session:
            result = await session.execute(query)
            return [self._to_domain(model) for model in result.scalars().all()]
    
    @staticmethod
    def _to_domain(model: WorkflowHistoryModel) -> ExecutionRecord:
        return ExecutionRecord(
            id=model.record_id,
            case_id=model.case_id,
            rule_id=model.rule_id,
            action_type=model.action_type,
            result=ExecutionStatus(model.result),
            executed_at=ensure_utc(model.executed_at),
            old_value=model.old_value,
            new_value=model.new_value,
            executed_by=model.executed_by,
            notes=model.notes,
            execution_id=model.execution_id,
        )
