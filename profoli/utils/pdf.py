"""
Tabular PDF report formatter (reportlab).

render_table_pdf(title, columns, rows) -> bytes: title, "Gerado em" line and a
striped table whose header row repeats on every page.
"""
import re
from datetime import datetime
from io import BytesIO
from typing import Any, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape, portrait
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Table, TableStyle, Spacer

HEADER_COLOR = colors.HexColor("#1e3a8a")
STRIPE_COLOR = colors.HexColor("#f2f2f2")

# Acima disso a tabela não cabe em retrato
_LANDSCAPE_MIN_COLUMNS = 7


def _cell_text(value: Any) -> str:
    if value is None:
        return "-"
    return escape(str(value))


def generated_at_line(generated_at: datetime) -> str:
    return f"Gerado em: {generated_at.strftime('%d/%m/%Y')} às {generated_at.strftime('%H:%M:%S')}"


def report_filename(title: str) -> str:
    """Relatório Financeiro -> relatório_financeiro.pdf"""
    name = re.sub(r"\s+", "_", title.strip().lower())
    return name.replace("/", "-").replace("\\", "-") + ".pdf"


def render_table_pdf(
    title: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    generated_at: datetime | None = None,
) -> bytes:
    """
    Gerar o PDF de um relatório tabular

    Args:
        title: título exibido no topo
        columns: cabeçalhos das colunas
        rows: matriz de células (None vira "-")
        generated_at: carimbo de geração (default: agora)

    Returns:
        bytes do documento PDF
    """
    generated_at = generated_at or datetime.now()
    pagesize = landscape(A4) if len(columns) >= _LANDSCAPE_MIN_COLUMNS else portrait(A4)

    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=pagesize,
        title=title,
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle("title", parent=styles["Heading1"], fontSize=18, spaceAfter=6)
    subtitle_style = ParagraphStyle("subtitle", parent=styles["Normal"], fontSize=11, spaceAfter=12)
    cell_style = ParagraphStyle("cell", parent=styles["Normal"], fontSize=9, leading=11)
    head_style = ParagraphStyle(
        "head", parent=cell_style, fontName="Helvetica-Bold", textColor=colors.white
    )

    story = [
        Paragraph(escape(title), title_style),
        Paragraph(generated_at_line(generated_at), subtitle_style),
        Spacer(1, 0.2 * cm),
    ]

    # Paragraph quebra linha dentro da célula; texto puro estouraria a coluna
    data = [[Paragraph(_cell_text(col), head_style) for col in columns]]
    for row in rows:
        data.append([Paragraph(_cell_text(cell), cell_style) for cell in row])

    if not rows:
        data.append([Paragraph("Nenhum dado encontrado para este relatório.", cell_style)]
                    + [""] * (len(columns) - 1))

    table = Table(data, repeatRows=1)
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LINEBELOW", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    for index in range(2, len(data), 2):
        style.append(("BACKGROUND", (0, index), (-1, index), STRIPE_COLOR))
    if not rows and len(columns) > 1:
        style.append(("SPAN", (0, 1), (-1, 1)))
    table.setStyle(TableStyle(style))
    story.append(table)

    doc.build(story)
    return buf.getvalue()
