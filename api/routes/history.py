"""
Execution history endpoints.
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from api.dependencies import get_rule_admin_service
from core.application.dtos import ExecutionRecordDTO


router = APIRouter()


@router.get(
    "",
    response_model=List[ExecutionRecordDTO],
    summary="Query workflow execution history",
)
async def get_history(
    case_id: Optional[str] = Query(default=None, description="Only records for this case"),
    limit: int = Query(default=50, ge=1, le=1000, description="Maximum number of records"),
    service=Depends(get_rule_admin_service),
):
    """
    Execution history, newest first.
    
    **Query Parameters:**
    - `case_id`: Filter by case
    - `limit`: Maximum records to return (1-1000, default: 50)
    """
    return await service.get_history(case_id=case_id, limit=limit)
