"""Shared helpers for the CaseDesk services."""
