"""Tests for message templates."""

from workflow.templates import NOTIFICATION_TEMPLATES, format_message, resolve_template


def test_named_template_is_resolved():
    assert resolve_template("resolution") == NOTIFICATION_TEMPLATES["resolution"]
    assert resolve_template("Plain text") == "Plain text"
    assert resolve_template(None) == ""


def test_case_data_wins_over_context():
    message = format_message("{caseId} {status}", {"caseId": "C-1", "status": "New"}, {"status": "Closed"})
    assert message == "C-1 New"


def test_none_renders_empty_and_unknown_placeholders_stay():
    message = format_message("[{assignee}] {unknown}", {"assignee": None})
    assert message == "[] {unknown}"


def test_context_fills_missing_values():
    message = format_message("deadline_warning", {"caseId": "C-9"}, {"deadline": "Friday"})
    assert message == "Case #C-9 is approaching its deadline: Friday"
