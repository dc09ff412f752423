"""
Validation utilities
"""
import re
from decimal import Decimal, InvalidOperation

# financial_transactions.amount é NUMERIC(12, 2)
MAX_INTEGER_DIGITS = 10


def normalize_decimal_input(value: str) -> str:
    """
    Normalizar valor digitado: vírgula vira ponto

    Example:
        >>> normalize_decimal_input("100,50")
        "100.50"
        >>> normalize_decimal_input("100.50")
        "100.50"
    """
    return value.strip().replace(",", ".")


def validate_decimal_amount(
    value: str,
    max_decimal_places: int = 2,
    max_integer_digits: int = MAX_INTEGER_DIGITS,
) -> tuple[bool, str | None]:
    """
    Validar um valor em dinheiro (não negativo)

    Args:
        value: valor como string
        max_decimal_places: máximo de casas decimais (padrão 2)
        max_integer_digits: máximo de dígitos antes da vírgula

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_decimal_amount("100.50")
        (True, None)
        >>> validate_decimal_amount("100.505")
        (False, "Máximo de 2 casas decimais")
    """
    normalized = normalize_decimal_input(value)

    try:
        Decimal(normalized)
    except (InvalidOperation, ValueError):
        return False, "Valor inválido"

    if normalized.startswith("-"):
        return False, "O valor não pode ser negativo"

    pattern = rf"^\d+(\.\d{{1,{max_decimal_places}}})?$"
    if not re.match(pattern, normalized):
        return False, f"Máximo de {max_decimal_places} casas decimais"

    integer_part = normalized.split(".", 1)[0].lstrip("0")
    if len(integer_part) > max_integer_digits:
        return False, "Valor acima do máximo permitido"

    return True, None


def validate_and_normalize_amount(value, max_decimal_places: int = 2) -> Decimal:
    """
    Validar e converter o valor para Decimal (exceção em caso de erro)

    Aceita str, int, float ou Decimal; floats passam por str() para não
    carregar ruído binário (0.1 -> "0.1").

    Raises:
        ValueError: se a validação falhar

    Example:
        >>> validate_and_normalize_amount("100,50")
        Decimal("100.50")
    """
    if isinstance(value, bool):
        raise ValueError("Valor inválido")
    raw = value if isinstance(value, str) else str(value)
    is_valid, error = validate_decimal_amount(raw, max_decimal_places)
    if not is_valid:
        raise ValueError(error)

    return Decimal(normalize_decimal_input(raw))
