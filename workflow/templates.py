"""Message templates and ``{placeholder}`` substitution."""

import re
from collections.abc import Mapping
from typing import Any

NOTIFICATION_TEMPLATES: dict[str, str] = {
    "status_change": "Case #{caseId} status changed from {oldStatus} to {newStatus}.",
    "assignment": "Case #{caseId} has been assigned to you.",
    "escalation": "Case #{caseId} has been escalated. Priority handling is required.",
    "deadline_warning": "Case #{caseId} is approaching its deadline: {deadline}",
    "resolution": "Case #{caseId} has been resolved. Please review.",
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def resolve_template(template: str | None) -> str:
    """Return the text of a named template, or the template itself."""
    if template is None:
        return ""
    return NOTIFICATION_TEMPLATES.get(template, template)


def format_message(
    template: str | None,
    case_data: Mapping[str, Any],
    context: Mapping[str, Any] | None = None,
) -> str:
    """Substitute ``{field}`` placeholders from case data, then execution context.

    Case fields take precedence over context keys of the same name. ``None``
    renders as an empty string and unknown placeholders are left verbatim.
    """
    values: dict[str, Any] = dict(context or {})
    values.update(case_data)

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        value = values[key]
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_replace, resolve_template(template))
