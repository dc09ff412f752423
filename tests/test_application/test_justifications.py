"""Tests for justification use cases"""
from datetime import date

import pytest

from profoli.infrastructure.db.models import Attendee, Theme, Justification
from profoli.application.justifications import (
    CreateJustificationUseCase, DeleteJustificationUseCase,
    JustificationValidationError, JustificationNotFoundError,
    list_justifications,
)


@pytest.fixture
def refs(db_session):
    attendee = Attendee(name="Ana", cpf="12345678900", roles=["Membro"])
    theme = Theme(title="Liderança", file_url="/uploads/a.pdf", file_type="application/pdf")
    db_session.add_all([attendee, theme])
    db_session.commit()
    return attendee.id, theme.id


class TestCreateJustification:
    def test_create(self, db_session, refs):
        attendee_id, theme_id = refs
        jid = CreateJustificationUseCase(db_session).execute(
            attendee_id=attendee_id, theme_id=theme_id,
            absence_date=date(2026, 3, 7), reason="  Saúde ",
        )
        justification = db_session.query(Justification).filter(Justification.id == jid).first()
        assert justification.reason == "Saúde"

    def test_reason_required(self, db_session, refs):
        with pytest.raises(JustificationValidationError, match="motivo"):
            CreateJustificationUseCase(db_session).execute(
                attendee_id=refs[0], theme_id=refs[1], absence_date=date(2026, 3, 7), reason=" ",
            )

    def test_unknown_theme(self, db_session, refs):
        with pytest.raises(JustificationValidationError, match="Tema"):
            CreateJustificationUseCase(db_session).execute(
                attendee_id=refs[0], theme_id=999, absence_date=date(2026, 3, 7), reason="Outro",
            )

    def test_unknown_attendee(self, db_session, refs):
        with pytest.raises(JustificationValidationError, match="Inscrito"):
            CreateJustificationUseCase(db_session).execute(
                attendee_id=999, theme_id=refs[1], absence_date=date(2026, 3, 7), reason="Outro",
            )


def test_delete(db_session, refs):
    jid = CreateJustificationUseCase(db_session).execute(
        attendee_id=refs[0], theme_id=refs[1], absence_date=date(2026, 3, 7), reason="Trabalho",
    )
    DeleteJustificationUseCase(db_session).execute(jid)
    assert db_session.query(Justification).count() == 0
    with pytest.raises(JustificationNotFoundError):
        DeleteJustificationUseCase(db_session).execute(jid)


def test_list_newest_first_with_names(db_session, refs):
    use_case = CreateJustificationUseCase(db_session)
    use_case.execute(attendee_id=refs[0], theme_id=refs[1], absence_date=date(2026, 3, 7), reason="Saúde")
    use_case.execute(attendee_id=refs[0], theme_id=refs[1], absence_date=date(2026, 4, 4), reason="Família")

    rows = list_justifications(db_session)
    assert [r["reason"] for r in rows] == ["Família", "Saúde"]
    assert rows[0]["attendee_name"] == "Ana"
    assert rows[0]["theme_title"] == "Liderança"
    assert rows[0]["date"] == "2026-04-04"
