"""
Attendee domain rules - CPF normalization, role tags, payment statuses
"""
import json
import re

PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUS_PAID = "paid"
PAYMENT_STATUS_EXEMPT = "exempt"

PAYMENT_STATUSES = (PAYMENT_STATUS_PENDING, PAYMENT_STATUS_PAID, PAYMENT_STATUS_EXEMPT)

# Rótulos usados nos relatórios
PAYMENT_STATUS_LABELS = {
    PAYMENT_STATUS_PAID: "Pago",
    PAYMENT_STATUS_EXEMPT: "Isento",
    PAYMENT_STATUS_PENDING: "Pendente",
}

ATTENDEE_STATUS_ACTIVE = "active"

# Cargos oferecidos no formulário de inscrição
ROLES = (
    "Auxiliar",
    "DEPIN",
    "Dirigente Círculo de oração",
    "Líder de departamento",
    "Ministério de Louvor",
    "Pastor",
    "Presbítero",
    "Regente",
    "Coordenador(a) de departamento",
    "Diáconos",
    "Evangelista",
    "Membro",
    "Outros",
    "Porteiro",
    "Professor(a) EBD",
)

CPF_LENGTH = 11

_NON_DIGITS = re.compile(r"\D")


def normalize_cpf(value: str | None) -> str:
    """
    Remove tudo que não for dígito

    Example:
        >>> normalize_cpf("123.456.789-00")
        "12345678900"
    """
    return _NON_DIGITS.sub("", value or "")


def is_valid_cpf_length(cpf_digits: str) -> bool:
    return len(cpf_digits) == CPF_LENGTH


def format_cpf(cpf_digits: str) -> str:
    """12345678900 -> 123.456.789-00 (valores fora do padrão voltam como estão)"""
    if len(cpf_digits) != CPF_LENGTH or not cpf_digits.isdigit():
        return cpf_digits
    return f"{cpf_digits[:3]}.{cpf_digits[3:6]}.{cpf_digits[6:9]}-{cpf_digits[9:]}"


def parse_roles(raw) -> list[str] | None:
    """
    Interpretar o conteúdo da coluna roles

    Aceita a lista nativa (formato atual) ou a string JSON gravada por
    cadastros antigos. Retorna None quando o valor não é uma lista de
    strings; quem chama decide como tratar o registro.
    """
    value = raw
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if not isinstance(value, list):
        return None
    if not all(isinstance(role, str) for role in value):
        return None
    return value


def clean_roles(roles: list[str]) -> list[str]:
    """Tirar espaços e duplicatas, preservando a ordem de escolha"""
    cleaned: list[str] = []
    for role in roles:
        role = role.strip()
        if role and role not in cleaned:
            cleaned.append(role)
    return cleaned


def payment_status_label(status: str) -> str:
    return PAYMENT_STATUS_LABELS.get(status, PAYMENT_STATUS_LABELS[PAYMENT_STATUS_PENDING])
