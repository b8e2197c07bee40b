"""Tests for the in-memory persistence adapters."""

from datetime import timedelta

import pytest

from core.domain.entities import CaseComment, ExecutionRecord, Followup
from core.domain.enums import ExecutionStatus
from core.domain.exceptions import StaleWriteError
from core.infrastructure.adapters.persistence.in_memory_case_store import InMemoryCaseStore
from core.infrastructure.adapters.persistence.in_memory_execution_history import InMemoryExecutionHistory
from core.infrastructure.adapters.persistence.in_memory_followup_scheduler import InMemoryFollowupScheduler
from core.infrastructure.adapters.persistence.in_memory_rule_source import InMemoryRuleSource


@pytest.mark.asyncio
async def test_case_store_hands_out_copies(make_case):
    store = InMemoryCaseStore([make_case(case_id="C-1")])

    snapshot = await store.read_case("C-1")
    snapshot.status = "Closed"

    assert store.get("C-1").status == "New"


@pytest.mark.asyncio
async def test_case_store_optimistic_check(make_case, now):
    case = make_case(case_id="C-1")
    store = InMemoryCaseStore([case])

    ok = await store.update_case("C-1", {"status": "Assigned"}, expected_last_modified=case.last_modified)
    assert ok.success is True

    with pytest.raises(StaleWriteError):
        await store.update_case("C-1", {"status": "In Progress"}, expected_last_modified=now)


@pytest.mark.asyncio
async def test_case_store_unknown_case(make_case):
    store = InMemoryCaseStore()
    result = await store.update_case("ghost", {"status": "New"})
    assert result.success is False
    assert (await store.append_comment("ghost", CaseComment(comment="x"))).success is False


@pytest.mark.asyncio
async def test_case_store_listings(make_case):
    store = InMemoryCaseStore([
        make_case(case_id="new", status="New"),
        make_case(case_id="rejected", status="Rejected"),
        make_case(case_id="resolved", status="Resolved"),
        make_case(case_id="critical", status="Assigned", priority="Critical"),
    ])

    assert [c.id for c in await store.list_active_cases()] == ["new", "rejected", "critical"]
    assert [c.id for c in await store.list_cases_eligible_for_escalation()] == ["new"]


@pytest.mark.asyncio
async def test_rule_source_crud(make_rule_row):
    source = InMemoryRuleSource()
    await source.add_row(make_rule_row(rule_id="r1", priority=1))

    assert await source.update_row("r1", {"priority": 9}) is True
    assert (await source.get_row("r1")).priority == 9
    assert await source.update_row("missing", {"priority": 9}) is False
    assert await source.delete_row("r1") is True
    assert await source.delete_row("r1") is False
    assert await source.fetch_rows() == []


@pytest.mark.asyncio
async def test_history_newest_first_with_limit(now):
    history = InMemoryExecutionHistory()
    for hours in (1, 3, 2):
        await history.append(
            ExecutionRecord(
                case_id="C-1",
                rule_id=f"r{hours}",
                action_type="add_comment",
                result=ExecutionStatus.SUCCESS,
                executed_at=now + timedelta(hours=hours),
            )
        )

    records = await history.list(limit=2)

    assert [r.rule_id for r in records] == ["r3", "r2"]
    assert await history.list(case_id="other") == []


@pytest.mark.asyncio
async def test_followup_scheduler_deduplicates(now):
    scheduler = InMemoryFollowupScheduler()
    followup = Followup(case_id="C-1", followup_date=now, followup_type="check_in")

    assert await scheduler.schedule(followup) is True
    assert await scheduler.schedule(followup) is True
    assert len(scheduler.followups) == 1
