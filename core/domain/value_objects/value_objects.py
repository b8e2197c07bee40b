"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for one workflow engine invocation."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)


@dataclass(frozen=True)
class RuleID:
    """
    Opaque identifier of a workflow rule.

    Assigned once at creation and never changed afterwards.
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Rule ID cannot be empty")

    @classmethod
    def generate(cls) -> "RuleID":
        """Generate a new RuleID."""
        return cls(value=str(uuid4()))

    def __str__(self) -> str:
        return self.value
