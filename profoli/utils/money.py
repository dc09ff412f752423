"""
Unified money formatting (Brazilian real).

Usage:
    from profoli.utils.money import format_brl

    format_brl(50)          -> "R$ 50,00"
    format_brl(1234.5)      -> "R$ 1.234,50"
    format_amount(1234.5)   -> "1234.50"
"""
from decimal import Decimal


def _to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if amount is None:
        return Decimal("0")
    return Decimal(str(amount))


def format_brl(amount) -> str:
    """
    Formatar com separador de milhar "." e decimal "," (padrão pt-BR).
    """
    formatted = f"{_to_decimal(amount):,.2f}"
    formatted = formatted.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {formatted}"


def format_amount(amount) -> str:
    """Duas casas, sem símbolo (coluna "Valor (R$)" dos relatórios)."""
    return f"{_to_decimal(amount):.2f}"
