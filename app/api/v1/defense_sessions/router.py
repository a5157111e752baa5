from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_account
from app.auth.rbac import require_roles
from app.auth.schemas import CurrentAccount
from app.core.enums import AccountRole
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .reports import XLSX_MEDIA_TYPE
from .schemas import (
    DefenseSessionCreate,
    DefenseSessionResponse,
    DefenseSlotCreate,
    DefenseSlotResponse,
    DefenseSlotUpdate,
    StudentSlotSummary,
)
from . import service

router = APIRouter(prefix="/api/v1/defense-sessions", tags=["defense-sessions"])


def _http_error(e: ServiceError) -> HTTPException:
    if e.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        return HTTPException(status_code=e.status_code, detail="Internal server error")
    return HTTPException(status_code=e.status_code, detail=e.message)


def _xlsx(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post(
    "",
    response_model=DefenseSessionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles())],
)
async def create_session(
    payload: DefenseSessionCreate,
    db: AsyncSession = Depends(get_db),
) -> DefenseSessionResponse:
    try:
        return await service.create_session(db, payload)
    except ServiceError as e:
        raise _http_error(e)


@router.get(
    "",
    response_model=List[DefenseSessionResponse],
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def list_sessions(
    db: AsyncSession = Depends(get_db),
) -> List[DefenseSessionResponse]:
    return await service.list_all(db)


@router.get(
    "/export",
    dependencies=[Depends(require_roles())],
)
async def export_sessions(
    db: AsyncSession = Depends(get_db),
) -> Response:
    """All sessions as an Excel sheet."""
    return _xlsx(await service.export_all(db), "defense_sessions.xlsx")


@router.get(
    "/me",
    response_model=List[DefenseSessionResponse],
)
async def list_my_sessions(
    db: AsyncSession = Depends(get_db),
    current_account: CurrentAccount = Depends(get_current_account),
) -> List[DefenseSessionResponse]:
    """Sessions visible to the caller, looked up through the student or reviewer owning the account."""
    try:
        if current_account.role == AccountRole.STUDENT.value:
            return await service.list_for_student_account(db, current_account.id)
        if current_account.role == AccountRole.REVIEWER.value:
            return await service.list_for_reviewer_account(db, current_account.id)
        return await service.list_all(db)
    except ServiceError as e:
        raise _http_error(e)


@router.get(
    "/me/slots",
    response_model=List[StudentSlotSummary],
    dependencies=[Depends(require_roles(AccountRole.STUDENT))],
)
async def list_my_slots(
    db: AsyncSession = Depends(get_db),
    current_account: CurrentAccount = Depends(get_current_account),
) -> List[StudentSlotSummary]:
    return await service.list_slots_for_student_account(db, current_account.id)


@router.get(
    "/students/{student_ref}",
    response_model=List[DefenseSessionResponse],
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def list_sessions_for_student(
    student_ref: int,
    db: AsyncSession = Depends(get_db),
) -> List[DefenseSessionResponse]:
    """student_ref: student id or the id of the student's account."""
    try:
        return await service.list_for_student(db, student_ref)
    except ServiceError as e:
        raise _http_error(e)


@router.get(
    "/students/{student_ref}/slots",
    response_model=List[StudentSlotSummary],
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def list_slots_for_student(
    student_ref: int,
    db: AsyncSession = Depends(get_db),
) -> List[StudentSlotSummary]:
    return await service.list_slots_for_student(db, student_ref)


@router.get(
    "/reviewers/{reviewer_ref}",
    response_model=List[DefenseSessionResponse],
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def list_sessions_for_reviewer(
    reviewer_ref: int,
    db: AsyncSession = Depends(get_db),
) -> List[DefenseSessionResponse]:
    """reviewer_ref: reviewer id or the id of the reviewer's account."""
    return await service.list_for_reviewer(db, reviewer_ref)


@router.get(
    "/reviewers/{reviewer_ref}/export",
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def export_sessions_for_reviewer(
    reviewer_ref: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    content = await service.export_for_reviewer(db, reviewer_ref)
    return _xlsx(content, f"defense_sessions_reviewer_{reviewer_ref}.xlsx")


@router.put(
    "/slots/{slot_id}",
    response_model=DefenseSlotResponse,
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def update_slot(
    slot_id: int,
    payload: DefenseSlotUpdate,
    db: AsyncSession = Depends(get_db),
) -> DefenseSlotResponse:
    try:
        return await service.update_slot(db, slot_id, payload)
    except ServiceError as e:
        raise _http_error(e)


@router.get(
    "/{session_id}/slots",
    response_model=List[DefenseSlotResponse],
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def list_session_slots(
    session_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[DefenseSlotResponse]:
    return await service.list_slots_for_session(db, session_id)


@router.post(
    "/{session_id}/slots",
    response_model=DefenseSlotResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def add_slot(
    session_id: int,
    payload: DefenseSlotCreate,
    db: AsyncSession = Depends(get_db),
) -> DefenseSlotResponse:
    try:
        return await service.add_slot(db, session_id, payload)
    except ServiceError as e:
        raise _http_error(e)


@router.get(
    "/{session_id}/slots/export",
    dependencies=[Depends(require_roles(AccountRole.REVIEWER))],
)
async def export_session_slots(
    session_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    content = await service.export_slots_for_session(db, session_id)
    return _xlsx(content, f"defense_session_{session_id}_slots.xlsx")
