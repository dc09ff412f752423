"""
Justification use cases
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from profoli.application.errors import NotFoundError
from profoli.infrastructure.db.models import Justification, Attendee, Theme

logger = logging.getLogger(__name__)


class JustificationValidationError(ValueError):
    pass


class JustificationNotFoundError(NotFoundError):
    pass


class CreateJustificationUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, attendee_id: int, theme_id: int, absence_date: date, reason: str) -> int:
        reason = (reason or "").strip()
        if not reason:
            raise JustificationValidationError("Informe o motivo da ausência.")
        if absence_date is None:
            raise JustificationValidationError("A data é obrigatória.")

        if not self.db.query(Attendee.id).filter(Attendee.id == attendee_id).first():
            raise JustificationValidationError(f"Inscrito #{attendee_id} não encontrado")
        if not self.db.query(Theme.id).filter(Theme.id == theme_id).first():
            raise JustificationValidationError(f"Tema #{theme_id} não encontrado")

        justification = Justification(
            attendee_id=attendee_id,
            theme_id=theme_id,
            date=absence_date,
            reason=reason,
        )
        self.db.add(justification)
        self.db.flush()
        self.db.commit()
        return justification.id


class DeleteJustificationUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, justification_id: int) -> None:
        justification = self.db.query(Justification).filter(
            Justification.id == justification_id
        ).first()
        if not justification:
            raise JustificationNotFoundError("Justificativa não encontrada")
        self.db.delete(justification)
        self.db.commit()


def list_justifications(db: Session) -> list[dict]:
    """Mais recentes primeiro, com nome do inscrito e título do tema"""
    rows = (
        db.query(Justification, Attendee.name, Theme.title)
        .outerjoin(Attendee, Attendee.id == Justification.attendee_id)
        .outerjoin(Theme, Theme.id == Justification.theme_id)
        .order_by(Justification.date.desc(), Justification.id.desc())
        .all()
    )
    return [
        {
            "id": j.id,
            "attendee_id": j.attendee_id,
            "theme_id": j.theme_id,
            "date": j.date.isoformat(),
            "reason": j.reason,
            "attendee_name": attendee_name,
            "theme_title": theme_title,
        }
        for j, attendee_name, theme_title in rows
    ]
