"""
Attendee API endpoints (inscritos)
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from profoli.api.deps import get_db, require_user
from profoli.application.attendees import (
    CreateAttendeeUseCase, UpdateAttendeeUseCase, DeleteAttendeeUseCase,
    AttendeeValidationError, AttendeeNotFoundError,
    list_attendees, get_attendee,
)
from profoli.domain.attendee import parse_roles, ROLES
from profoli.infrastructure.db.models import Attendee


router = APIRouter(prefix="/api/attendees", tags=["attendees"])


# === Request models ===

def _coerce_roles(value):
    # cliente antigo manda a lista já serializada como string JSON
    if value is None or isinstance(value, list):
        return value
    parsed = parse_roles(value)
    if parsed is None:
        raise ValueError("Cargos inválidos")
    return parsed


class CreateAttendeeRequest(BaseModel):
    name: str
    cpf: str
    roles: list[str] = []
    church: str | None = None
    phone: str | None = None

    @field_validator("roles", mode="before")
    @classmethod
    def validate_roles(cls, v):
        return _coerce_roles(v)


class UpdateAttendeeRequest(BaseModel):
    name: str | None = None
    cpf: str | None = None
    roles: list[str] | None = None
    church: str | None = None
    phone: str | None = None
    status: str | None = None
    payment_status: str | None = None

    @field_validator("roles", mode="before")
    @classmethod
    def validate_roles(cls, v):
        return _coerce_roles(v)


def attendee_to_dict(attendee: Attendee) -> dict:
    roles = parse_roles(attendee.roles)
    return {
        "id": attendee.id,
        "name": attendee.name,
        "cpf": attendee.cpf,
        "roles": roles if roles is not None else [],
        "church": attendee.church,
        "phone": attendee.phone,
        "status": attendee.status,
        "payment_status": attendee.payment_status,
        "created_at": attendee.created_at.isoformat() if attendee.created_at else None,
    }


# === Endpoints ===

@router.get("")
def get_attendees(db: Session = Depends(get_db), auth=Depends(require_user)):
    return [attendee_to_dict(a) for a in list_attendees(db)]


@router.get("/roles")
def get_roles():
    """Cargos oferecidos no formulário de inscrição (público)"""
    return list(ROLES)


@router.post("")
def create_attendee(req: CreateAttendeeRequest, db: Session = Depends(get_db)):
    """Inscrição pública: não exige login"""
    try:
        attendee_id = CreateAttendeeUseCase(db).execute(
            name=req.name,
            cpf=req.cpf,
            roles=req.roles,
            church=req.church,
            phone=req.phone,
        )
    except AttendeeValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"id": attendee_id}


@router.get("/{attendee_id}")
def get_attendee_detail(attendee_id: int, db: Session = Depends(get_db), auth=Depends(require_user)):
    try:
        attendee = get_attendee(db, attendee_id)
    except AttendeeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return attendee_to_dict(attendee)


@router.put("/{attendee_id}")
def update_attendee(
    attendee_id: int,
    req: UpdateAttendeeRequest,
    db: Session = Depends(get_db),
    auth=Depends(require_user),
):
    try:
        UpdateAttendeeUseCase(db).execute(attendee_id, **req.model_dump(exclude_unset=True))
    except AttendeeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AttendeeValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True}


@router.delete("/{attendee_id}")
def delete_attendee(attendee_id: int, db: Session = Depends(get_db), auth=Depends(require_user)):
    try:
        DeleteAttendeeUseCase(db).execute(attendee_id)
    except AttendeeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
