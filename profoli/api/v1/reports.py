"""
Report endpoints: JSON preview and PDF download
"""
import logging
from datetime import datetime
from urllib.parse import quote
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from profoli.api.deps import get_db, require_user, parse_optional_date, parse_optional_int
from profoli.config import get_settings
from profoli.readmodels.reports import (
    build_report, ReportParameterError, UnknownReportError,
)
from profoli.utils.pdf import render_table_pdf, report_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _build(db: Session, kind: str, session_date: str | None, theme_id: str | None):
    try:
        return build_report(
            db,
            kind,
            session_date=parse_optional_date(session_date),
            theme_id=parse_optional_int(theme_id, "theme_id"),
        )
    except UnknownReportError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ReportParameterError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{kind}")
def report_preview(
    kind: str,
    date: str | None = None,
    theme_id: str | None = None,
    db: Session = Depends(get_db),
    auth=Depends(require_user),
):
    return _build(db, kind, date, theme_id).to_dict()


@router.get("/{kind}/pdf")
def report_pdf(
    kind: str,
    date: str | None = None,
    theme_id: str | None = None,
    db: Session = Depends(get_db),
    auth=Depends(require_user),
):
    report = _build(db, kind, date, theme_id)
    now = datetime.now(ZoneInfo(get_settings().TIMEZONE))
    pdf = render_table_pdf(report.title, report.columns, report.rows, generated_at=now)

    filename = report_filename(report.title)
    logger.info(f"Report {kind!r} rendered: {len(report.rows)} rows, {len(pdf)} bytes")
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
