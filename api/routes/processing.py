"""
Workflow processing endpoints.

Manual trigger processing and the scheduler ticks. An external cron (or the
host platform's scheduler) calls the tick endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import Any, Dict
import logging

from api.dependencies import get_case_store, get_escalation_scheduler, get_workflow_engine
from core.application.dtos import ProcessRequestDTO
from workflow.models import ProcessResult, SweepResult


logger = logging.getLogger(__name__)
router = APIRouter()


def _process_result_to_dict(result: ProcessResult) -> Dict[str, Any]:
    return {
        "execution_id": str(result.execution_id),
        "case_id": result.case_id,
        "trigger_type": result.trigger_type,
        "started_at": result.started_at.isoformat(),
        "finished_at": result.finished_at.isoformat(),
        "processed_rules": result.processed_rule_count,
        "failed_rules": result.failed_rule_count,
        "error": result.error,
        "rules": [
            {
                "rule_id": rule.rule_id,
                "rule_name": rule.rule_name,
                "success": rule.success,
                "error": rule.error,
                "actions": [action.to_dict() for action in rule.actions],
            }
            for rule in result.rule_results
        ],
    }


def _sweep_result_to_dict(result: SweepResult) -> Dict[str, Any]:
    return {
        "kind": result.kind,
        "started_at": result.started_at.isoformat(),
        "finished_at": result.finished_at.isoformat() if result.finished_at else None,
        "cases_examined": result.cases_examined,
        "triggers_raised": result.triggers_raised,
        "failures": result.failures,
        "cancelled": result.cancelled,
        "skipped": result.skipped,
        "error": result.error,
    }


# =============================================================================
# MANUAL PROCESSING
# =============================================================================

@router.post(
    "/process",
    status_code=status.HTTP_200_OK,
    summary="Process a trigger for a stored case",
)
async def process_case(
    request: ProcessRequestDTO,
    case_store=Depends(get_case_store),
    engine=Depends(get_workflow_engine),
):
    """
    Run every applicable rule for the trigger.
    
    Action failures are reported in the body; the request itself succeeds
    whenever the case exists.
    """
    case = await case_store.read_case(request.case_id)
    if case is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Case not found: {request.case_id}",
        )
    
    result = await engine.process(case, request.trigger_type, request.context)
    return _process_result_to_dict(result)


# =============================================================================
# SCHEDULER TICKS
# =============================================================================

@router.post(
    "/ticks/periodic",
    summary="Run the periodic check",
)
async def periodic_tick(scheduler=Depends(get_escalation_scheduler)):
    result = await scheduler.on_periodic_tick()
    return _sweep_result_to_dict(result)


@router.post(
    "/ticks/daily",
    summary="Run the daily escalation sweep",
)
async def daily_tick(scheduler=Depends(get_escalation_scheduler)):
    result = await scheduler.on_daily_tick()
    return _sweep_result_to_dict(result)
