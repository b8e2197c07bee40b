"""Application services."""
from .rule_admin_service import RuleAdminService

__all__ = ["RuleAdminService"]
