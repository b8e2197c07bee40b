"""Rule repository - parses rule rows and caches enabled rules with a TTL."""

import json
import time
from collections.abc import Callable
from typing import Any

from casedesk_sdk.logging import get_logger
from core.domain.entities import Action, WorkflowRule
from core.domain.exceptions import RuleDefinitionError
from core.domain.repositories import RuleRow, RuleSource

from .conditions import ConditionEvaluator

DEFAULT_CACHE_TTL_SECONDS = 600.0


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _parse_priority(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _decode(payload: Any, default: Any, what: str, rule_id: str) -> Any:
    if payload is None or (isinstance(payload, str) and not payload.strip()):
        return default
    if not isinstance(payload, str):
        return payload
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise RuleDefinitionError(f"invalid JSON in {what}: {exc.msg}", rule_id=rule_id) from exc


def parse_rule(row: RuleRow) -> WorkflowRule:
    """Turn a raw row into a WorkflowRule.

    Raises:
        RuleDefinitionError: if the conditions/actions payloads are malformed
    """
    conditions = _decode(row.conditions, {}, "conditions", row.id)
    if not isinstance(conditions, dict):
        raise RuleDefinitionError("conditions must be a JSON object", rule_id=row.id)

    raw_actions = _decode(row.actions, [], "actions", row.id)
    if not isinstance(raw_actions, list):
        raise RuleDefinitionError("actions must be a JSON array", rule_id=row.id)

    actions = []
    for index, raw in enumerate(raw_actions):
        if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
            raise RuleDefinitionError(f"action #{index} has no type", rule_id=row.id)
        parameters = raw.get("parameters") or {}
        if not isinstance(parameters, dict):
            raise RuleDefinitionError(f"action #{index} parameters must be an object", rule_id=row.id)
        actions.append(Action(type=raw["type"], parameters=parameters))

    return WorkflowRule(
        id=row.id,
        name=row.name,
        trigger_type=row.trigger_type,
        conditions=conditions,
        actions=tuple(actions),
        priority=_parse_priority(row.priority),
        enabled=_parse_bool(row.enabled),
        created_at=row.created_at,
        last_modified=row.last_modified,
        created_by=row.created_by,
    )


class RuleRepository:
    """Loads enabled workflow rules from a RuleSource.

    The parsed rule list is cached per instance for ``ttl_seconds``;
    ``invalidate()`` forces the next ``load()`` to read the source again.
    """

    def __init__(
        self,
        source: RuleSource,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: list[WorkflowRule] | None = None
        self._cached_at: float | None = None
        self._logger = get_logger("workflow.repository")
        self.warnings: list[str] = []

    @property
    def source(self) -> RuleSource:
        return self._source

    def is_cache_valid(self) -> bool:
        if self._cache is None or self._cached_at is None:
            return False
        return (self._clock() - self._cached_at) < self._ttl_seconds

    def invalidate(self) -> None:
        """Drop the cached rules; the next load() reads the source."""
        self._cache = None
        self._cached_at = None

    async def load(self) -> list[WorkflowRule]:
        """Return enabled rules in source order.

        Rows with malformed payloads or no actions are skipped with a warning.
        """
        if self.is_cache_valid():
            return list(self._cache)

        rows = await self._source.fetch_rows()
        rules: list[WorkflowRule] = []
        warnings: list[str] = []

        for row in rows:
            if not row.id or not _parse_bool(row.enabled):
                continue
            try:
                rule = parse_rule(row)
            except RuleDefinitionError as exc:
                warnings.append(str(exc))
                self._logger.warning(f"Skipping workflow rule: {exc}")
                continue

            if rule.is_noop:
                message = f"Rule {rule.id}: enabled rule has no actions"
                warnings.append(message)
                self._logger.warning(f"Skipping workflow rule: {message}")
                continue

            for field_name in ConditionEvaluator.unknown_operators(rule.conditions):
                message = (
                    f"Rule {rule.id}: unknown operator in condition on {field_name!r}; "
                    "condition will never match"
                )
                warnings.append(message)
                self._logger.warning(message)

            rules.append(rule)

        self._cache = rules
        self._cached_at = self._clock()
        self.warnings = warnings
        self._logger.info(f"Loaded {len(rules)} workflow rule(s) ({len(warnings)} warning(s))")
        return list(rules)
