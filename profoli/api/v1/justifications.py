"""
Justification API endpoints
"""
from datetime import date as date_type

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from profoli.api.deps import get_db, require_user
from profoli.application.justifications import (
    CreateJustificationUseCase, DeleteJustificationUseCase,
    JustificationValidationError, JustificationNotFoundError,
    list_justifications,
)
from profoli.domain.attendance import JUSTIFICATION_REASONS


router = APIRouter(prefix="/api/justifications", tags=["justifications"])


class CreateJustificationRequest(BaseModel):
    attendee_id: int
    theme_id: int
    date: date_type
    reason: str


@router.get("")
def get_justifications(db: Session = Depends(get_db), auth=Depends(require_user)):
    return list_justifications(db)


@router.get("/reasons")
def get_reasons(auth=Depends(require_user)):
    return list(JUSTIFICATION_REASONS)


@router.post("")
def create_justification(
    req: CreateJustificationRequest,
    db: Session = Depends(get_db),
    auth=Depends(require_user),
):
    try:
        justification_id = CreateJustificationUseCase(db).execute(
            attendee_id=req.attendee_id,
            theme_id=req.theme_id,
            absence_date=req.date,
            reason=req.reason,
        )
    except JustificationValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"id": justification_id}


@router.delete("/{justification_id}")
def delete_justification(justification_id: int, db: Session = Depends(get_db), auth=Depends(require_user)):
    try:
        DeleteJustificationUseCase(db).execute(justification_id)
    except JustificationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
