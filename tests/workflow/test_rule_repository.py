"""Tests for RuleRepository loading and caching."""

from dataclasses import replace

import pytest

from core.domain.exceptions import RuleDefinitionError
from core.infrastructure.adapters.persistence.in_memory_rule_source import InMemoryRuleSource
from workflow.repository import RuleRepository, parse_rule


class FakeClock:
    def __init__(self) -> None:
        self.value = 0.0

    def __call__(self) -> float:
        return self.value


@pytest.mark.asyncio
async def test_malformed_rule_is_excluded_and_others_load(make_rule_row):
    good_1 = make_rule_row(rule_id="good-1")
    broken = replace(make_rule_row(rule_id="broken"), actions="[{not json")
    good_2 = make_rule_row(rule_id="good-2")
    repository = RuleRepository(InMemoryRuleSource([good_1, broken, good_2]))

    rules = await repository.load()

    assert [r.id for r in rules] == ["good-1", "good-2"]
    assert len(repository.warnings) == 1
    assert "broken" in repository.warnings[0]


@pytest.mark.asyncio
async def test_disabled_rules_are_skipped(make_rule_row):
    rows = [
        make_rule_row(rule_id="on"),
        make_rule_row(rule_id="off", enabled=False),
        replace(make_rule_row(rule_id="off-text"), enabled="false"),
        replace(make_rule_row(rule_id="on-text"), enabled="TRUE"),
    ]
    rules = await RuleRepository(InMemoryRuleSource(rows)).load()
    assert [r.id for r in rules] == ["on", "on-text"]


@pytest.mark.asyncio
async def test_enabled_rule_without_actions_is_flagged(make_rule_row):
    repository = RuleRepository(InMemoryRuleSource([make_rule_row(rule_id="empty", actions=[])]))

    rules = await repository.load()

    assert rules == []
    assert repository.warnings == ["Rule empty: enabled rule has no actions"]


@pytest.mark.asyncio
async def test_unknown_operator_is_kept_with_warning(make_rule_row):
    row = make_rule_row(rule_id="odd", conditions={"subject": {"operator": "regex", "value": "x"}})
    repository = RuleRepository(InMemoryRuleSource([row]))

    rules = await repository.load()

    assert [r.id for r in rules] == ["odd"]
    assert "unknown operator" in repository.warnings[0]


@pytest.mark.asyncio
async def test_cache_is_reused_until_ttl_expires(make_rule_row):
    source = InMemoryRuleSource([make_rule_row()])
    clock = FakeClock()
    repository = RuleRepository(source, ttl_seconds=600, clock=clock)

    await repository.load()
    clock.value = 599
    await repository.load()
    assert source.fetch_count == 1

    clock.value = 600
    await repository.load()
    assert source.fetch_count == 2


@pytest.mark.asyncio
async def test_invalidate_forces_reload(make_rule_row):
    source = InMemoryRuleSource([make_rule_row(rule_id="first")])
    repository = RuleRepository(source, clock=FakeClock())

    assert [r.id for r in await repository.load()] == ["first"]
    await source.add_row(make_rule_row(rule_id="second"))
    assert [r.id for r in await repository.load()] == ["first"]

    repository.invalidate()
    assert not repository.is_cache_valid()
    assert [r.id for r in await repository.load()] == ["first", "second"]


@pytest.mark.asyncio
async def test_instances_do_not_share_cache(make_rule_row):
    first = RuleRepository(InMemoryRuleSource([make_rule_row(rule_id="a")]))
    second = RuleRepository(InMemoryRuleSource([make_rule_row(rule_id="b")]))

    assert [r.id for r in await first.load()] == ["a"]
    assert [r.id for r in await second.load()] == ["b"]


@pytest.mark.parametrize(
    "field,payload",
    [
        ("conditions", "[1, 2]"),
        ("actions", "{}"),
        ("actions", '[{"parameters": {}}]'),
        ("actions", '[{"type": "add_comment", "parameters": "text"}]'),
    ],
)
def test_parse_rule_rejects_bad_shapes(make_rule_row, field, payload):
    row = replace(make_rule_row(rule_id="bad"), **{field: payload})
    with pytest.raises(RuleDefinitionError) as exc_info:
        parse_rule(row)
    assert exc_info.value.rule_id == "bad"


def test_parse_rule_defaults_and_priority(make_rule_row):
    row = replace(make_rule_row(), conditions="", priority="7")
    rule = parse_rule(row)
    assert dict(rule.conditions) == {}
    assert rule.priority == 7
    assert rule.actions[0].type == "add_comment"


@pytest.mark.parametrize(
    "stored,expected",
    [("5.0", 5), (" 3 ", 3), (2.9, 2), ("high", 0), (None, 0)],
)
def test_parse_rule_coerces_text_priority(make_rule_row, stored, expected):
    rule = parse_rule(replace(make_rule_row(), priority=stored))
    assert rule.priority == expected
