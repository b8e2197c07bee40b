"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from fastapi import APIRouter, Depends
import platform

from api.dependencies import get_rule_repository
from casedesk_sdk.utils.datetime import utc_now


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    
    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": "casedesk",
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check(repository=Depends(get_rule_repository)):
    """
    Readiness check endpoint.
    
    Loads the rule set, which also exercises the rule store connection.
    """
    rules = await repository.load()
    return {
        "status": "ready",
        "timestamp": utc_now().isoformat(),
        "checks": {
            "api": "ok",
            "rules_loaded": len(rules),
            "rule_warnings": len(repository.warnings),
        },
    }
