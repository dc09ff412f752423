"""
Dashboard statistics readmodel.

Computed on every call from attendees + financial_transactions; returns
plain dicts ready for JSON.
"""
import logging
from collections import Counter
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from profoli.domain.attendee import PAYMENT_STATUS_PAID, parse_roles
from profoli.domain.transaction import TRANSACTION_TYPE_INCOME, TRANSACTION_TYPE_EXPENSE
from profoli.infrastructure.db.models import Attendee, FinancialTransaction

logger = logging.getLogger(__name__)


def _sum_amount(db: Session, transaction_type: str) -> Decimal:
    total = db.query(func.coalesce(func.sum(FinancialTransaction.amount), 0)).filter(
        FinancialTransaction.type == transaction_type
    ).scalar()
    return Decimal(str(total or 0))


def count_roles(raw_roles) -> Counter:
    """
    Frequência de cada cargo

    Registros com roles ilegível (dado legado) ficam fora da contagem.
    """
    counts: Counter = Counter()
    for raw in raw_roles:
        roles = parse_roles(raw)
        if roles is None:
            logger.debug(f"Skipping unparsable roles value {raw!r}")
            continue
        counts.update(set(roles))
    return counts


def get_dashboard_stats(db: Session) -> dict:
    """Aggregate stats for /api/stats."""
    total_attendees = db.query(func.count(Attendee.id)).scalar() or 0
    paid_attendees = db.query(func.count(Attendee.id)).filter(
        Attendee.payment_status == PAYMENT_STATUS_PAID
    ).scalar() or 0

    total_income = _sum_amount(db, TRANSACTION_TYPE_INCOME)
    total_expense = _sum_amount(db, TRANSACTION_TYPE_EXPENSE)

    role_counts = count_roles(raw for (raw,) in db.query(Attendee.roles).all())

    return {
        "totalAttendees": total_attendees,
        "paidAttendees": paid_attendees,
        "totalIncome": float(total_income),
        "totalExpense": float(total_expense),
        "roleCounts": dict(role_counts),
    }
