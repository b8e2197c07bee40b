"""
Case Priority Enum.

Priorities are ordered; escalation steps up this order.
"""
from enum import Enum


class CasePriority(str, Enum):
    """Case priority values, lowest first."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @classmethod
    def values(cls) -> set[str]:
        return {member.value for member in cls}

    @classmethod
    def ordered(cls) -> list["CasePriority"]:
        return [cls.LOW, cls.MEDIUM, cls.HIGH, cls.CRITICAL]

    @classmethod
    def escalate(cls, current: str | None, levels: int = 1) -> "CasePriority":
        """
        Step ``current`` up by ``levels``, clamped at Critical.

        Negative levels count as zero; escalation never lowers a priority.
        An unknown current priority is treated as sitting just below Low,
        so one level of escalation lands on Low.
        """
        order = cls.ordered()
        values = [p.value for p in order]
        index = values.index(current) if current in values else -1
        new_index = min(index + max(int(levels), 0), len(order) - 1)
        return order[max(new_index, 0)]

    @property
    def is_max(self) -> bool:
        return self is CasePriority.CRITICAL
