"""
Attendance domain rules - session key and finalization flag
"""
from dataclasses import dataclass
from datetime import date

JUSTIFICATION_REASONS = (
    "Trabalho",
    "Saúde",
    "Família",
    "Agenda",
    "Imprevisto",
    "Pessoal",
    "Outro",
)

PRESENT_LABEL = "Presente"
ABSENT_LABEL = "Ausente"


@dataclass(frozen=True)
class SessionKey:
    """
    Chamada = par (date, theme_id)
    """
    date: date
    theme_id: int


@dataclass(frozen=True)
class RosterEntry:
    attendee_id: int
    present: bool


def resolve_finalized(requested: bool, already_finalized: bool) -> bool:
    """Uma chamada finalizada continua finalizada em qualquer reenvio"""
    return bool(requested or already_finalized)


def presence_label(present: bool | None) -> str:
    return PRESENT_LABEL if present else ABSENT_LABEL
