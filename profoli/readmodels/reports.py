"""
Report builders for the "Relatórios" screens.

Each builder returns a ReportTable (title, columns, rows) that is shown as a
JSON preview or rendered by profoli.utils.pdf.render_table_pdf.
"""
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session

from profoli.application.attendees import list_attendees
from profoli.application.errors import NotFoundError
from profoli.application.financial import list_transactions
from profoli.application.justifications import list_justifications
from profoli.config import get_settings
from profoli.domain.attendance import presence_label
from profoli.domain.attendee import parse_roles, payment_status_label, format_cpf
from profoli.domain.transaction import transaction_type_label
from profoli.infrastructure.db.models import AttendanceRecord, Theme
from profoli.readmodels.payments import get_payment_methods
from profoli.utils.money import format_amount


class ReportParameterError(ValueError):
    pass


class UnknownReportError(NotFoundError):
    pass


@dataclass
class ReportTable:
    title: str
    columns: list[str]
    rows: list[list] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"title": self.title, "columns": self.columns, "rows": self.rows}


def _br_date(value: date | str | None) -> str:
    if value is None:
        return "-"
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return value.strftime("%d/%m/%Y")


def _roles_text(raw) -> str:
    roles = parse_roles(raw)
    if roles is None:
        return raw if isinstance(raw, str) else "-"
    return ", ".join(roles)


def build_attendees_report(db: Session, **params) -> ReportTable:
    rows = [
        [
            a.name,
            format_cpf(a.cpf),
            a.church,
            a.phone,
            _roles_text(a.roles),
            payment_status_label(a.payment_status),
        ]
        for a in list_attendees(db)
    ]
    return ReportTable(
        title="Relatório Geral de Inscritos",
        columns=["Nome", "CPF", "Igreja", "Telefone", "Cargos", "Status Pgto"],
        rows=rows,
    )


def build_financial_report(db: Session, **params) -> ReportTable:
    rows = [
        [
            _br_date(t["date"]),
            transaction_type_label(t["type"]),
            t["category"],
            format_amount(t["amount"]),
            t["description"] or "-",
            t["attendee_name"] or "-",
        ]
        for t in list_transactions(db)
    ]
    return ReportTable(
        title="Relatório Financeiro",
        columns=["Data", "Tipo", "Categoria", "Valor (R$)", "Descrição", "Inscrito"],
        rows=rows,
    )


def build_frequency_report(db: Session, **params) -> ReportTable:
    """
    Frequência: uma coluna por data com chamada registrada

    Uma data com mais de um tema conta como presença se o inscrito esteve
    em qualquer um deles.
    """
    records = db.query(
        AttendanceRecord.attendee_id, AttendanceRecord.date, AttendanceRecord.present
    ).all()
    dates = sorted({r.date for r in records})
    present = {(r.attendee_id, r.date) for r in records if r.present}

    rows = []
    for attendee in list_attendees(db):
        row = [attendee.name]
        row.extend(presence_label((attendee.id, d) in present) for d in dates)
        rows.append(row)

    return ReportTable(
        title="Relatório de Frequência",
        columns=["Nome"] + [_br_date(d) for d in dates],
        rows=rows,
    )


def build_justifications_report(db: Session, **params) -> ReportTable:
    rows = [
        [_br_date(j["date"]), j["attendee_name"], j["theme_title"], j["reason"]]
        for j in list_justifications(db)
    ]
    return ReportTable(
        title="Relatório de Justificativas de Ausência",
        columns=["Data", "Inscrito", "Tema", "Motivo"],
        rows=rows,
    )


def build_payment_methods_report(db: Session, **params) -> ReportTable:
    methods = get_payment_methods(get_settings())
    rows = [[item["method"], item["details"]] for item in methods["instructions"]]
    if methods["card_link"]:
        rows[1][1] = f"{rows[1][1]}: {methods['card_link']}"
    return ReportTable(
        title="Formas de Pagamento - PROFOLI",
        columns=["Forma de Pagamento", "Detalhes/Instruções"],
        rows=rows,
    )


def build_session_report(
    db: Session,
    session_date: date | None = None,
    theme_id: int | None = None,
    **params,
) -> ReportTable:
    """Lista de uma chamada; inscritos sem registro aparecem como ausentes"""
    if session_date is None or theme_id is None:
        raise ReportParameterError("Informe a data e o tema da chamada.")
    theme = db.query(Theme).filter(Theme.id == theme_id).first()
    if not theme:
        raise ReportParameterError(f"Tema #{theme_id} não encontrado")

    present = {
        attendee_id
        for (attendee_id,) in db.query(AttendanceRecord.attendee_id).filter(
            AttendanceRecord.date == session_date,
            AttendanceRecord.theme_id == theme_id,
            AttendanceRecord.present.is_(True),
        ).all()
    }
    rows = [
        [a.name, a.church, presence_label(a.id in present)]
        for a in list_attendees(db)
    ]
    return ReportTable(
        title=f"Chamada - {_br_date(session_date)} - {theme.title}",
        columns=["Nome", "Igreja", "Status"],
        rows=rows,
    )


REPORT_BUILDERS = {
    "attendees": build_attendees_report,
    "financial": build_financial_report,
    "attendance": build_frequency_report,
    "justifications": build_justifications_report,
    "payment-methods": build_payment_methods_report,
    "session": build_session_report,
}


def build_report(db: Session, kind: str, **params) -> ReportTable:
    """
    Raises:
        UnknownReportError: tipo de relatório inexistente
        ReportParameterError: parâmetros ausentes ou inválidos
    """
    builder = REPORT_BUILDERS.get(kind)
    if builder is None:
        raise UnknownReportError(f"Relatório desconhecido: {kind}")
    return builder(db, **params)
