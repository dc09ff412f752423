"""
Financial transaction domain rules
"""
from decimal import Decimal

from profoli.domain.attendee import PAYMENT_STATUS_EXEMPT, PAYMENT_STATUS_PAID

TRANSACTION_TYPE_INCOME = "income"
TRANSACTION_TYPE_EXPENSE = "expense"

TRANSACTION_TYPES = (TRANSACTION_TYPE_INCOME, TRANSACTION_TYPE_EXPENSE)

TRANSACTION_TYPE_LABELS = {
    TRANSACTION_TYPE_INCOME: "Entrada",
    TRANSACTION_TYPE_EXPENSE: "Saída",
}

EXEMPT_DESCRIPTION_TAG = "[ISENÇÃO]"

INCOME_CATEGORIES = (
    "Inscrição",
    "Oferta",
    "Doação",
    "Outros",
)

EXPENSE_CATEGORIES = (
    "Ajuda de custo para o Palestrante",
    "Material de secretaria",
    "Alimentação",
    "Hospedagem",
    "Ajuda de Custo",
    "Outros",
)


def apply_exemption(amount: Decimal, description: str | None, is_exempt: bool) -> tuple[Decimal, str]:
    """
    Isenção sempre vence o valor informado: amount vira 0 e a descrição
    ganha a marca [ISENÇÃO].

    Returns:
        (amount, description) a gravar
    """
    description = (description or "").strip()
    if not is_exempt:
        return amount, description
    if description.startswith(EXEMPT_DESCRIPTION_TAG):
        return Decimal("0"), description
    tagged = f"{EXEMPT_DESCRIPTION_TAG} {description}".strip()
    return Decimal("0"), tagged


def resulting_payment_status(transaction_type: str, attendee_id: int | None, is_exempt: bool) -> str | None:
    """
    Status de pagamento que o lançamento impõe ao inscrito ligado,
    ou None quando não há propagação (saídas ou lançamento sem inscrito).
    """
    if transaction_type != TRANSACTION_TYPE_INCOME or attendee_id is None:
        return None
    return PAYMENT_STATUS_EXEMPT if is_exempt else PAYMENT_STATUS_PAID


def transaction_type_label(transaction_type: str) -> str:
    return TRANSACTION_TYPE_LABELS.get(transaction_type, transaction_type)
