"""Integration tests for the SQLAlchemy rule source and history sink."""

import json
from datetime import timedelta

import pytest

from core.domain.entities import ExecutionRecord
from core.domain.enums import ExecutionStatus
from core.infrastructure.database.repositories import SQLAlchemyExecutionHistory, SQLAlchemyRuleSource
from workflow.repository import RuleRepository


@pytest.mark.asyncio
async def test_rule_rows_round_trip_in_insertion_order(test_session_factory, make_rule_row):
    source = SQLAlchemyRuleSource(test_session_factory)
    await source.add_row(make_rule_row(rule_id="b", priority=1))
    await source.add_row(make_rule_row(rule_id="a", priority=1))

    rows = await source.fetch_rows()

    assert [r.id for r in rows] == ["b", "a"]
    assert json.loads(rows[0].actions)[0]["type"] == "add_comment"
    assert rows[0].created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_rule_row_update_and_delete(test_session_factory, make_rule_row):
    source = SQLAlchemyRuleSource(test_session_factory)
    await source.add_row(make_rule_row(rule_id="r1"))

    assert await source.update_row("r1", {"enabled": False, "priority": 4}) is True
    row = await source.get_row("r1")
    assert row.enabled is False
    assert row.priority == 4

    assert await source.update_row("missing", {"priority": 1}) is False
    assert await source.delete_row("r1") is True
    assert await source.get_row("r1") is None
    assert await source.delete_row("r1") is False


@pytest.mark.asyncio
async def test_repository_over_sql_source_skips_malformed_rows(test_session_factory, make_rule_row):
    source = SQLAlchemyRuleSource(test_session_factory)
    await source.add_row(make_rule_row(rule_id="ok"))
    await source.add_row(make_rule_row(rule_id="broken"))
    await source.update_row("broken", {"conditions": "{oops"})

    rules = await RuleRepository(source).load()

    assert [r.id for r in rules] == ["ok"]


@pytest.mark.asyncio
async def test_history_newest_first(test_session_factory, now):
    history = SQLAlchemyExecutionHistory(test_session_factory)
    for minutes, case_id in ((1, "C-1"), (3, "C-2"), (2, "C-1")):
        await history.append(
            ExecutionRecord(
                case_id=case_id,
                rule_id="r1",
                action_type="change_status",
                result=ExecutionStatus.SUCCESS,
                executed_at=now + timedelta(minutes=minutes),
                old_value="New",
                new_value="Assigned",
                notes="ok",
            )
        )

    records = await history.list()
    assert [r.case_id for r in records] == ["C-2", "C-1", "C-1"]
    assert records[0].executed_at == now + timedelta(minutes=3)
    assert records[0].result == ExecutionStatus.SUCCESS

    only_c1 = await history.list(case_id="C-1", limit=1)
    assert len(only_c1) == 1
    assert only_c1[0].executed_at == now + timedelta(minutes=2)
    assert (only_c1[0].old_value, only_c1[0].new_value) == ("New", "Assigned")
