"""Status transition graph and validation."""

from collections.abc import Mapping

from core.domain.enums import CaseStatus
from core.domain.exceptions import InvalidTransitionError

# Closed only permits reopening
DEFAULT_TRANSITIONS: dict[str, frozenset[str]] = {
    CaseStatus.NEW.value: frozenset({"In Progress", "Assigned", "Escalated"}),
    CaseStatus.ASSIGNED.value: frozenset({"In Progress", "On Hold", "Escalated"}),
    CaseStatus.IN_PROGRESS.value: frozenset({"Pending Review", "On Hold", "Resolved"}),
    CaseStatus.PENDING_REVIEW.value: frozenset({"In Progress", "Resolved", "Rejected"}),
    CaseStatus.ON_HOLD.value: frozenset({"In Progress", "Assigned"}),
    CaseStatus.ESCALATED.value: frozenset({"In Progress", "Assigned"}),
    CaseStatus.RESOLVED.value: frozenset({"Closed", "Reopened"}),
    CaseStatus.REJECTED.value: frozenset({"New", "Closed"}),
    CaseStatus.REOPENED.value: frozenset({"In Progress", "Assigned"}),
    CaseStatus.CLOSED.value: frozenset({"Reopened"}),
}


class StatusTransitionValidator:
    """Validates proposed status changes against a fixed directed graph."""

    def __init__(self, transitions: Mapping[str, frozenset[str] | set[str]] | None = None) -> None:
        graph = transitions if transitions is not None else DEFAULT_TRANSITIONS
        self._graph = {str(src): frozenset(str(t) for t in targets) for src, targets in graph.items()}
        self._known = set(self._graph)
        for targets in self._graph.values():
            self._known.update(targets)

    def is_known(self, status: str | None) -> bool:
        return status in self._known

    def allowed_from(self, status: str | None) -> frozenset[str]:
        return self._graph.get(str(status), frozenset())

    def is_allowed(self, from_status: str | None, to_status: str | None) -> bool:
        """True when the graph has an edge from ``from_status`` to ``to_status``."""
        if not self.is_known(to_status):
            return False
        return to_status in self.allowed_from(from_status)

    def validate(self, from_status: str | None, to_status: str | None) -> None:
        """Raise InvalidTransitionError unless the transition is allowed."""
        if not self.is_allowed(from_status, to_status):
            raise InvalidTransitionError(from_status, to_status)
