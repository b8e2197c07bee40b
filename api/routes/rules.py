"""
Workflow rule administration endpoints.

Every mutation invalidates the engine's rule cache, so changes apply to
the next processed trigger.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List
import logging

from api.dependencies import get_rule_admin_service
from core.application.dtos import RuleCreateDTO, RuleDTO, RuleUpdateDTO
from core.domain.exceptions import RuleDefinitionError, RuleNotFoundError


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# LIST RULES
# =============================================================================

@router.get(
    "",
    response_model=List[RuleDTO],
    status_code=status.HTTP_200_OK,
    summary="List workflow rules",
)
async def list_rules(
    include_disabled: bool = Query(default=True, description="Include disabled rules"),
    service=Depends(get_rule_admin_service),
):
    """List stored rules in insertion order."""
    return await service.list_rules(include_disabled=include_disabled)


# =============================================================================
# CREATE RULE
# =============================================================================

@router.post(
    "",
    response_model=RuleDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a workflow rule",
)
async def create_rule(
    request: RuleCreateDTO,
    service=Depends(get_rule_admin_service),
):
    """
    Create a rule.
    
    **Validation:**
    - Known trigger type and action types
    - At least one action
    - Known condition operators
    """
    try:
        return await service.create_rule(request)
    except RuleDefinitionError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )


# =============================================================================
# GET / UPDATE / DELETE RULE
# =============================================================================

@router.get(
    "/{rule_id}",
    response_model=RuleDTO,
    summary="Get a workflow rule",
)
async def get_rule(rule_id: str, service=Depends(get_rule_admin_service)):
    try:
        return await service.get_rule(rule_id)
    except RuleNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuleDefinitionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.patch(
    "/{rule_id}",
    response_model=RuleDTO,
    summary="Update a workflow rule",
)
async def update_rule(
    rule_id: str,
    request: RuleUpdateDTO,
    service=Depends(get_rule_admin_service),
):
    """Apply a partial update; omitted fields keep their stored values."""
    try:
        return await service.update_rule(rule_id, request)
    except RuleNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuleDefinitionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.delete(
    "/{rule_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a workflow rule",
)
async def delete_rule(rule_id: str, service=Depends(get_rule_admin_service)):
    try:
        await service.delete_rule(rule_id)
    except RuleNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
