"""
Attendee use cases - registration ledger (inscritos)
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from profoli.application.errors import NotFoundError
from profoli.domain.attendee import (
    normalize_cpf, is_valid_cpf_length, clean_roles, PAYMENT_STATUSES,
)
from profoli.infrastructure.db.models import (
    Attendee, AttendanceRecord, Justification, FinancialTransaction,
)

logger = logging.getLogger(__name__)

DUPLICATE_CPF_MESSAGE = "Este CPF já está cadastrado no sistema."
CPF_TAKEN_MESSAGE = "Este CPF já pertence a outro inscrito."


class AttendeeValidationError(ValueError):
    pass


class DuplicateCpfError(AttendeeValidationError):
    """CPF (normalizado) já usado por outro inscrito"""
    pass


class AttendeeNotFoundError(NotFoundError):
    pass


def _validated_cpf(cpf: str | None) -> str:
    digits = normalize_cpf(cpf)
    if not is_valid_cpf_length(digits):
        raise AttendeeValidationError("CPF inválido. Digite os 11 números.")
    return digits


def _validated_roles(roles: list[str] | None) -> list[str]:
    cleaned = clean_roles(roles or [])
    if not cleaned:
        raise AttendeeValidationError("Selecione pelo menos um cargo.")
    return cleaned


def _validated_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise AttendeeValidationError("O nome é obrigatório.")
    return name


def _optional(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


def _cpf_in_use(db: Session, cpf_digits: str, exclude_id: int | None = None) -> bool:
    query = db.query(Attendee.id).filter(Attendee.cpf == cpf_digits)
    if exclude_id is not None:
        query = query.filter(Attendee.id != exclude_id)
    return query.first() is not None


def _commit_cpf_change(db: Session, message: str) -> None:
    """Commit; a violação do UNIQUE(cpf) numa corrida vira DuplicateCpfError"""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateCpfError(message)


class CreateAttendeeUseCase:
    """
    Use case: inscrição (pública ou pelo painel)
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        name: str,
        cpf: str,
        roles: list[str],
        church: str | None = None,
        phone: str | None = None,
    ) -> int:
        """
        Returns:
            attendee_id

        Raises:
            DuplicateCpfError: CPF já cadastrado (comparação só por dígitos)
            AttendeeValidationError: nome, CPF ou cargos inválidos
        """
        name = _validated_name(name)
        cpf_digits = _validated_cpf(cpf)
        roles = _validated_roles(roles)

        if _cpf_in_use(self.db, cpf_digits):
            raise DuplicateCpfError(DUPLICATE_CPF_MESSAGE)

        attendee = Attendee(
            name=name,
            cpf=cpf_digits,
            roles=roles,
            church=_optional(church),
            phone=_optional(phone),
        )
        self.db.add(attendee)
        _commit_cpf_change(self.db, DUPLICATE_CPF_MESSAGE)

        logger.info(f"Attendee #{attendee.id} registered")
        return attendee.id


class UpdateAttendeeUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, attendee_id: int, **changes) -> None:
        attendee = self.db.query(Attendee).filter(Attendee.id == attendee_id).first()
        if not attendee:
            raise AttendeeNotFoundError("Inscrito não encontrado")

        if "name" in changes:
            attendee.name = _validated_name(changes["name"])
        if changes.get("cpf") is not None:
            cpf_digits = _validated_cpf(changes["cpf"])
            if _cpf_in_use(self.db, cpf_digits, exclude_id=attendee_id):
                raise DuplicateCpfError(CPF_TAKEN_MESSAGE)
            attendee.cpf = cpf_digits
        if changes.get("roles") is not None:
            attendee.roles = _validated_roles(changes["roles"])
        if "church" in changes:
            attendee.church = _optional(changes["church"])
        if "phone" in changes:
            attendee.phone = _optional(changes["phone"])
        if changes.get("status"):
            attendee.status = changes["status"].strip()
        if changes.get("payment_status"):
            if changes["payment_status"] not in PAYMENT_STATUSES:
                raise AttendeeValidationError(
                    f"Status de pagamento inválido: {changes['payment_status']}"
                )
            attendee.payment_status = changes["payment_status"]

        _commit_cpf_change(self.db, CPF_TAKEN_MESSAGE)


class DeleteAttendeeUseCase:
    """
    Use case: excluir inscrito

    Presenças e justificativas vão junto; lançamentos financeiros ficam,
    apenas desvinculados, para não alterar os totais do caixa.
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(self, attendee_id: int) -> None:
        attendee = self.db.query(Attendee).filter(Attendee.id == attendee_id).first()
        if not attendee:
            raise AttendeeNotFoundError("Inscrito não encontrado")

        self.db.query(AttendanceRecord).filter(
            AttendanceRecord.attendee_id == attendee_id
        ).delete(synchronize_session=False)
        self.db.query(Justification).filter(
            Justification.attendee_id == attendee_id
        ).delete(synchronize_session=False)
        self.db.query(FinancialTransaction).filter(
            FinancialTransaction.attendee_id == attendee_id
        ).update({FinancialTransaction.attendee_id: None}, synchronize_session=False)

        self.db.delete(attendee)
        self.db.commit()
        logger.info(f"Attendee #{attendee_id} deleted")


def list_attendees(db: Session) -> list[Attendee]:
    return db.query(Attendee).order_by(Attendee.name.asc(), Attendee.id.asc()).all()


def get_attendee(db: Session, attendee_id: int) -> Attendee:
    attendee = db.query(Attendee).filter(Attendee.id == attendee_id).first()
    if not attendee:
        raise AttendeeNotFoundError("Inscrito não encontrado")
    return attendee


def find_attendee_by_cpf(db: Session, cpf: str) -> Attendee | None:
    """Busca pelo CPF digitado em qualquer formato (a coluna guarda só dígitos)"""
    digits = normalize_cpf(cpf)
    if not digits:
        return None
    return db.query(Attendee).filter(Attendee.cpf == digits).first()


def get_public_status(db: Session, cpf: str) -> dict:
    """
    Consulta pública de situação da inscrição

    Raises:
        AttendeeNotFoundError: nenhum inscrito com esse CPF
    """
    attendee = find_attendee_by_cpf(db, cpf)
    if not attendee:
        raise AttendeeNotFoundError("Inscrito não encontrado")
    return {
        "id": attendee.id,
        "name": attendee.name,
        "cpf": attendee.cpf,
        "payment_status": attendee.payment_status,
    }
