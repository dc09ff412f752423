"""
Attendance use cases - roll call reconciliation per session (date + theme)
"""
import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from profoli.domain.attendance import SessionKey, RosterEntry, resolve_finalized
from profoli.infrastructure.db.models import AttendanceRecord, Attendee, Theme

logger = logging.getLogger(__name__)


class AttendanceValidationError(ValueError):
    pass


@dataclass(frozen=True)
class ReconcileResult:
    session: SessionKey
    saved: int
    finalized: bool


class ReconcileAttendanceUseCase:
    """
    Use case: gravar a chamada de uma sessão

    Read-modify-write numa única transação: registros existentes são
    atualizados, os que faltam são inseridos e o commit publica a chamada
    inteira de uma vez. Inscritos fora da submissão ficam como estavam.
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        session_date: date | None,
        theme_id: int | None,
        records: list[RosterEntry] | list[dict],
        finalize: bool = False,
    ) -> ReconcileResult:
        """
        Raises:
            AttendanceValidationError: sessão inválida, inscrito inexistente
                ou inscrito repetido na submissão
            SQLAlchemyError: falha de storage (nada é gravado)
        """
        session = self._validate_session(session_date, theme_id)
        roster = self._validate_roster(records)

        try:
            existing = {
                record.attendee_id: record
                for record in self.db.query(AttendanceRecord).filter(
                    AttendanceRecord.date == session.date,
                    AttendanceRecord.theme_id == session.theme_id,
                ).all()
            }
            already_finalized = any(record.finalized for record in existing.values())
            finalized = resolve_finalized(finalize, already_finalized)

            for entry in roster:
                record = existing.get(entry.attendee_id)
                if record is None:
                    record = AttendanceRecord(
                        attendee_id=entry.attendee_id,
                        date=session.date,
                        theme_id=session.theme_id,
                    )
                    self.db.add(record)
                    existing[entry.attendee_id] = record
                record.present = entry.present

            for record in existing.values():
                record.finalized = finalized

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Attendance for {session.date} / theme {session.theme_id} rolled back")
            raise

        logger.info(
            f"Attendance saved for {session.date} / theme {session.theme_id}: "
            f"{len(roster)} records, finalized={finalized}"
        )
        return ReconcileResult(session=session, saved=len(roster), finalized=finalized)

    def _validate_session(self, session_date: date | None, theme_id: int | None) -> SessionKey:
        if session_date is None or theme_id is None:
            raise AttendanceValidationError("Data e tema são obrigatórios.")
        theme = self.db.query(Theme.id).filter(Theme.id == theme_id).first()
        if not theme:
            raise AttendanceValidationError(f"Tema #{theme_id} não encontrado")
        return SessionKey(date=session_date, theme_id=theme_id)

    def _validate_roster(self, records) -> list[RosterEntry]:
        roster = []
        seen = set()
        for raw in records or []:
            entry = raw if isinstance(raw, RosterEntry) else RosterEntry(
                attendee_id=raw["attendee_id"], present=bool(raw.get("present")),
            )
            if entry.attendee_id in seen:
                raise AttendanceValidationError(
                    f"Inscrito #{entry.attendee_id} aparece mais de uma vez na chamada"
                )
            seen.add(entry.attendee_id)
            roster.append(entry)

        if seen:
            found = {
                row.id for row in self.db.query(Attendee.id).filter(Attendee.id.in_(seen)).all()
            }
            missing = sorted(seen - found)
            if missing:
                raise AttendanceValidationError(
                    f"Inscrito(s) não encontrado(s): {', '.join(str(i) for i in missing)}"
                )
        return roster


def list_attendance(
    db: Session,
    session_date: date | None = None,
    theme_id: int | None = None,
) -> list[AttendanceRecord]:
    """Filtros opcionais; sem filtro devolve tudo"""
    query = db.query(AttendanceRecord)
    if session_date is not None:
        query = query.filter(AttendanceRecord.date == session_date)
    if theme_id is not None:
        query = query.filter(AttendanceRecord.theme_id == theme_id)
    return query.order_by(AttendanceRecord.id.asc()).all()


def is_session_finalized(db: Session, session_date: date, theme_id: int) -> bool:
    row = db.query(AttendanceRecord.id).filter(
        AttendanceRecord.date == session_date,
        AttendanceRecord.theme_id == theme_id,
        AttendanceRecord.finalized.is_(True),
    ).first()
    return row is not None
