"""
SQLAlchemy Rule Source Implementation.

Implements RuleSource over the ``workflow_rules`` table. Every call opens
its own session and commits before returning.
"""
from typing import Any, List, Mapping, Optional
import logging
from sqlalchemy import select

from casedesk_sdk.utils.datetime import ensure_utc
from core.domain.repositories import RuleRow, RuleSource
from core.infrastructure.database.models import WorkflowRuleModel


logger = logging.getLogger(__name__)


_COLUMNS = (
    "name", "trigger_type", "conditions", "actions", "priority",
    "enabled", "created_at", "last_modified", "created_by",
)


class SQLAlchemyRuleSource(RuleSource):
    """
    SQLAlchemy implementation of RuleSource.
    """
    
    def __init__(self, session_factory):
        """
        Initialize rule source.
        
        Args:
            session_factory: Callable returning an AsyncSession context manager
        """
        self.session_factory = session_factory
    
    async def fetch_rows(self) -> List[RuleRow]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(WorkflowRuleModel).order_by(WorkflowRuleModel.pk)
            )
            rows = [self._to_row(model) for model in result.scalars().all()]
        logger.debug(f"Fetched {len(rows)} workflow rule rows")
        return rows
    
    async def get_row(self, rule_id: str) -> Optional[RuleRow]:
        async with self.session_factory() as session:
            model = await self._find(session, rule_id)
            return self._to_row(model) if model else None
    
    async def add_row(self, row: RuleRow) -> None:
        async with self.session_factory() as session:
            model = WorkflowRuleModel(rule_id=row.id)
            for column in _COLUMNS:
                value = getattr(row, column)
                if value is not None:
                    setattr(model, column, value)
            session.add(model)
            await session.commit()
        logger.info(f"✅ Created workflow rule: {row.id}")
    
    async def update_row(self, rule_id: str, changes: Mapping[str, Any]) -> bool:
        async with self.session_factory() as session:
            model = await self._find(session, rule_id)
            if model is None:
                return False
            for column, value in changes.items():
                if column not in _COLUMNS:
                    raise ValueError(f"Unknown rule column: {column}")
                setattr(model, column, value)
            await session.commit()
        logger.info(f"✅ Updated workflow rule: {rule_id}")
        return True
    
    async def delete_row(self, rule_id: str) -> bool:
        async with self.session_factory() as session:
            model = await self._find(session, rule_id)
            if model is None:
                return False
            await session.delete(model)
            await session.commit()
        logger.info(f"Deleted workflow rule: {rule_id}")
        return True
    
    @staticmethod
    async def _find(session, rule_id: str) -> Optional[WorkflowRuleModel]:
        result = await session.execute(
            select(WorkflowRuleModel).where(WorkflowRuleModel.rule_id == rule_id)
        )
        return result.scalar_one_or_none()
    
    @staticmethod
    def _to_row(model: WorkflowRuleModel) -> RuleRow:
        return RuleRow(
            id=model.rule_id,
            name=model.name,
            trigger_type=model.trigger_type,
            conditions=model.conditions,
            actions=model.actions,
            priority=model.priority,
            enabled=model.enabled,
            created_at=ensure_utc(model.created_at),
            last_modified=ensure_utc(model.last_modified),
            created_by=model.created_by,
        )
