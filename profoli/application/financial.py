"""
Financial ledger use cases - income/expense log with payment status propagation
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from profoli.application.errors import NotFoundError
from profoli.domain.transaction import (
    TRANSACTION_TYPES, apply_exemption, resulting_payment_status,
)
from profoli.infrastructure.db.models import FinancialTransaction, Attendee
from profoli.utils.money import format_amount
from profoli.utils.validation import validate_and_normalize_amount

logger = logging.getLogger(__name__)


class TransactionValidationError(ValueError):
    """Erro de validação do lançamento"""
    pass


class TransactionNotFoundError(NotFoundError):
    pass


@dataclass(frozen=True)
class RecordedTransaction:
    id: int
    amount: Decimal
    description: str
    payment_status: str | None
    payment_status_updated: bool


class RecordTransactionUseCase:
    """
    Use case: registrar lançamento (entrada/saída)

    Uma entrada ligada a um inscrito atualiza o payment_status dele
    (paid, ou exempt quando isento). Essa propagação roda depois do commit
    do lançamento e é best-effort: se falhar, o lançamento continua gravado,
    a falha vai para o log e o resultado traz payment_status_updated=False.
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        type: str,
        category: str,
        amount,
        date: date,
        description: str | None = None,
        attendee_id: int | None = None,
        is_exempt: bool = False,
    ) -> RecordedTransaction:
        """
        Args:
            type: income | expense
            category: categoria (obrigatória)
            amount: valor >= 0, no máximo 2 casas (ignorado se isento)
            date: data do lançamento
            description: texto livre
            attendee_id: inscrito ligado (opcional)
            is_exempt: isenção - força valor 0 e marca a descrição

        Raises:
            TransactionValidationError
        """
        if type not in TRANSACTION_TYPES:
            raise TransactionValidationError(f"Tipo de lançamento inválido: {type}")
        category = (category or "").strip()
        if not category:
            raise TransactionValidationError("A categoria é obrigatória.")
        if date is None:
            raise TransactionValidationError("A data é obrigatória.")

        if is_exempt:
            amount = Decimal("0")
        else:
            try:
                amount = validate_and_normalize_amount(amount, max_decimal_places=2)
            except ValueError as e:
                raise TransactionValidationError(str(e)) from e

        if attendee_id is not None:
            exists = self.db.query(Attendee.id).filter(Attendee.id == attendee_id).first()
            if not exists:
                raise TransactionValidationError(f"Inscrito #{attendee_id} não encontrado")

        amount, description = apply_exemption(amount, description, is_exempt)

        transaction = FinancialTransaction(
            type=type,
            category=category,
            amount=amount,
            date=date,
            description=description or None,
            attendee_id=attendee_id,
        )
        self.db.add(transaction)
        self.db.flush()
        self.db.commit()
        logger.info(
            f"Transaction #{transaction.id} recorded: {type} {format_amount(amount)} ({category})"
        )

        new_status = resulting_payment_status(type, attendee_id, is_exempt)
        updated = False
        if new_status is not None:
            updated = self._propagate_payment_status(transaction.id, attendee_id, new_status)

        return RecordedTransaction(
            id=transaction.id,
            amount=amount,
            description=description,
            payment_status=new_status,
            payment_status_updated=updated,
        )

    def _propagate_payment_status(self, transaction_id: int, attendee_id: int, status: str) -> bool:
        try:
            updated_rows = self.db.query(Attendee).filter(Attendee.id == attendee_id).update(
                {Attendee.payment_status: status}, synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(
                f"Payment status of attendee #{attendee_id} not updated after transaction #{transaction_id}"
            )
            return False

        if not updated_rows:
            logger.warning(
                f"Attendee #{attendee_id} vanished before payment status update (transaction #{transaction_id})"
            )
            return False
        return True


class DeleteTransactionUseCase:
    """
    Use case: excluir lançamento

    O payment_status do inscrito ligado não é revertido.
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(self, transaction_id: int) -> None:
        transaction = self.db.query(FinancialTransaction).filter(
            FinancialTransaction.id == transaction_id
        ).first()
        if not transaction:
            raise TransactionNotFoundError("Lançamento não encontrado")
        self.db.delete(transaction)
        self.db.commit()
        logger.info(f"Transaction #{transaction_id} deleted")


def list_transactions(db: Session) -> list[dict]:
    rows = (
        db.query(FinancialTransaction, Attendee.name)
        .outerjoin(Attendee, Attendee.id == FinancialTransaction.attendee_id)
        .order_by(FinancialTransaction.date.desc(), FinancialTransaction.id.desc())
        .all()
    )
    return [
        {
            "id": t.id,
            "type": t.type,
            "category": t.category,
            "amount": float(t.amount),
            "date": t.date.isoformat(),
            "description": t.description,
            "attendee_id": t.attendee_id,
            "attendee_name": attendee_name,
        }
        for t, attendee_name in rows
    ]
