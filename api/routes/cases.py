"""
Case snapshot endpoints.

Cases are owned by an external system; these endpoints let it push the
current state of a case so that triggers can be processed against it.
"""
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from api.dependencies import get_case_store
from casedesk_sdk.utils.datetime import utc_now
from core.application.dtos import CaseDTO, CaseUpsertDTO
from core.domain.entities import CaseSnapshot


logger = logging.getLogger(__name__)
router = APIRouter()


def _to_dto(case: CaseSnapshot) -> CaseDTO:
    return CaseDTO(
        id=case.id,
        status=case.status,
        priority=case.priority,
        assignee=case.assignee,
        created_at=case.created_at,
        last_modified=case.last_modified,
        fields=case.fields,
    )


@router.put(
    "/{case_id}",
    response_model=CaseDTO,
    summary="Store a case snapshot",
)
async def put_case(
    case_id: str,
    request: CaseUpsertDTO,
    case_store=Depends(get_case_store),
):
    now = utc_now()
    case = CaseSnapshot(
        id=case_id,
        status=request.status,
        priority=request.priority,
        assignee=request.assignee,
        created_at=request.created_at or now,
        last_modified=request.last_modified or now,
        fields=dict(request.fields),
    )
    case_store.add_case(case)
    logger.info(f"Case snapshot stored: {case_id} ({case.status})")
    return _to_dto(case)


@router.get(
    "/{case_id}",
    response_model=CaseDTO,
    summary="Get a case snapshot",
)
async def get_case(case_id: str, case_store=Depends(get_case_store)):
    case = await case_store.read_case(case_id)
    if case is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Case not found: {case_id}",
        )
    return _to_dto(case)
