"""
Attendance API endpoints (chamadas)
"""
from datetime import date as date_type

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from profoli.api.deps import (
    get_db, require_user, AuthSession, parse_optional_date, parse_optional_int,
)
from profoli.application.attendance import (
    ReconcileAttendanceUseCase, AttendanceValidationError,
    list_attendance, is_session_finalized,
)
from profoli.domain.attendance import RosterEntry


router = APIRouter(prefix="/api/attendance", tags=["attendance"])


# === Request models ===

class AttendanceEntry(BaseModel):
    attendee_id: int
    present: bool = False


class SaveAttendanceRequest(BaseModel):
    date: date_type
    theme_id: int
    records: list[AttendanceEntry] = []
    finalized: bool = False


# === Endpoints ===

@router.get("")
def get_attendance(
    date: str | None = None,
    theme_id: str | None = None,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(require_user),
):
    session_date = parse_optional_date(date)
    theme_ref = parse_optional_int(theme_id, "theme_id")
    return [
        {
            "id": r.id,
            "attendee_id": r.attendee_id,
            "date": r.date.isoformat(),
            "theme_id": r.theme_id,
            "present": r.present,
            "finalized": r.finalized,
        }
        for r in list_attendance(db, session_date=session_date, theme_id=theme_ref)
    ]


@router.post("")
def save_attendance(
    req: SaveAttendanceRequest,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(require_user),
):
    """Gravar chamada; sessão finalizada só aceita escrita de admin"""
    if not auth.is_admin and is_session_finalized(db, req.date, req.theme_id):
        raise HTTPException(
            status_code=403,
            detail="Chamada finalizada: apenas administradores podem alterar."
        )

    try:
        result = ReconcileAttendanceUseCase(db).execute(
            session_date=req.date,
            theme_id=req.theme_id,
            records=[RosterEntry(attendee_id=r.attendee_id, present=r.present) for r in req.records],
            finalize=req.finalized,
        )
    except AttendanceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"success": True, "saved": result.saved, "finalized": result.finalized}
