"""Tests for theme use cases (apostilas)"""
from datetime import date

import pytest

from profoli.infrastructure.db.models import Attendee, Theme, AttendanceRecord, Justification
from profoli.infrastructure.storage.local import StorageError
from profoli.application.themes import (
    CreateThemeUseCase, UpdateThemeUseCase, DeleteThemeUseCase,
    ThemeValidationError, ThemeNotFoundError, FileUpload,
    list_themes, get_theme,
)

PDF = FileUpload(filename="apostila.pdf", content_type="application/pdf", content=b"%PDF-1.4 demo")
COVER = FileUpload(filename="capa.PNG", content_type="image/png", content=b"\x89PNG demo")


class TestCreateTheme:
    def test_create_stores_files(self, db_session, storage):
        tid = CreateThemeUseCase(db_session, storage).execute(
            title=" Liderança ", file=PDF, speaker="Pr. João",
            event_date=date(2026, 3, 7), cover=COVER,
        )
        theme = db_session.query(Theme).filter(Theme.id == tid).first()
        assert theme.title == "Liderança"
        assert theme.file_type == "application/pdf"
        assert theme.file_url.startswith("/uploads/")
        assert theme.file_url.endswith(".pdf")
        assert theme.cover_image_url.endswith(".png")

        stored = storage.base_dir / theme.file_url.rsplit("/", 1)[1]
        assert stored.read_bytes() == PDF.content

    def test_file_required(self, db_session, storage):
        with pytest.raises(ThemeValidationError, match="arquivo"):
            CreateThemeUseCase(db_session, storage).execute(title="Tema", file=None)

    def test_title_required(self, db_session, storage):
        with pytest.raises(ThemeValidationError, match="título"):
            CreateThemeUseCase(db_session, storage).execute(title="", file=PDF)

    def test_file_too_large(self, db_session, storage):
        big = FileUpload(filename="big.pdf", content_type="application/pdf", content=b"x" * (2 * 1024 * 1024))
        with pytest.raises(StorageError, match="limite"):
            CreateThemeUseCase(db_session, storage).execute(title="Tema", file=big)
        assert db_session.query(Theme).count() == 0


class TestUpdateTheme:
    def test_new_file_replaces_url_and_type(self, db_session, storage):
        tid = CreateThemeUseCase(db_session, storage).execute(title="Tema", file=PDF)
        old_url = db_session.query(Theme.file_url).filter(Theme.id == tid).scalar()
        doc = FileUpload(filename="slides.pptx", content_type="application/vnd.ms-powerpoint", content=b"pptx")

        UpdateThemeUseCase(db_session, storage).execute(tid, title="Tema 2", file=doc)
        theme = db_session.query(Theme).filter(Theme.id == tid).first()
        assert theme.title == "Tema 2"
        assert theme.file_url != old_url
        assert theme.file_type == "application/vnd.ms-powerpoint"

    def test_explicit_file_url_kept(self, db_session, storage):
        tid = CreateThemeUseCase(db_session, storage).execute(title="Tema", file=PDF)
        UpdateThemeUseCase(db_session, storage).execute(
            tid, title="Tema", file_url="https://drive.example.org/apostila.pdf",
        )
        theme = db_session.query(Theme).filter(Theme.id == tid).first()
        assert theme.file_url == "https://drive.example.org/apostila.pdf"
        assert theme.file_type == "application/pdf"

    def test_replaced_files_removed_from_disk(self, db_session, storage):
        tid = CreateThemeUseCase(db_session, storage).execute(title="Tema", file=PDF, cover=COVER)
        doc = FileUpload(filename="v2.pdf", content_type="application/pdf", content=b"%PDF-1.4 v2")
        new_cover = FileUpload(filename="capa2.png", content_type="image/png", content=b"\x89PNG v2")

        UpdateThemeUseCase(db_session, storage).execute(tid, title="Tema", file=doc, cover=new_cover)
        theme = db_session.query(Theme).filter(Theme.id == tid).first()
        remaining = sorted(p.name for p in storage.base_dir.iterdir())
        assert remaining == sorted([
            theme.file_url.rsplit("/", 1)[1],
            theme.cover_image_url.rsplit("/", 1)[1],
        ])

    def test_not_found(self, db_session, storage):
        with pytest.raises(ThemeNotFoundError):
            UpdateThemeUseCase(db_session, storage).execute(5, title="X")


def test_delete_cascades_session_data(db_session, storage):
    tid = CreateThemeUseCase(db_session, storage).execute(title="Tema", file=PDF)
    attendee = Attendee(name="Ana", cpf="12345678900", roles=["Membro"])
    db_session.add(attendee)
    db_session.flush()
    db_session.add(AttendanceRecord(attendee_id=attendee.id, date=date(2026, 3, 7), theme_id=tid, present=True))
    db_session.add(Justification(attendee_id=attendee.id, theme_id=tid, date=date(2026, 3, 7), reason="Outro"))
    db_session.commit()

    DeleteThemeUseCase(db_session, storage).execute(tid)
    assert db_session.query(Theme).count() == 0
    assert db_session.query(AttendanceRecord).count() == 0
    assert db_session.query(Justification).count() == 0
    assert db_session.query(Attendee).count() == 1


def test_list_newest_first(db_session, storage):
    use_case = CreateThemeUseCase(db_session, storage)
    first = use_case.execute(title="Primeiro", file=PDF)
    second = use_case.execute(title="Segundo", file=PDF)
    assert [t.id for t in list_themes(db_session)] == [second, first]


def test_delete_removes_stored_files(db_session, storage):
    tid = CreateThemeUseCase(db_session, storage).execute(title="Tema", file=PDF, cover=COVER)
    assert len(list(storage.base_dir.iterdir())) == 2

    DeleteThemeUseCase(db_session, storage).execute(tid)
    assert list(storage.base_dir.iterdir()) == []


def test_delete_keeps_external_links(db_session, storage, tmp_path):
    outside = tmp_path / "outside.pdf"
    outside.write_bytes(b"keep")
    tid = CreateThemeUseCase(db_session, storage).execute(title="Tema", file=PDF)
    UpdateThemeUseCase(db_session, storage).execute(
        tid, title="Tema", file_url="https://drive.example.org/apostila.pdf",
    )

    DeleteThemeUseCase(db_session, storage).execute(tid)
    assert outside.read_bytes() == b"keep"
    assert storage.delete("https://drive.example.org/apostila.pdf") is False
    assert storage.delete("/uploads/../outside.pdf") is False


def test_get_theme(db_session, storage):
    tid = CreateThemeUseCase(db_session, storage).execute(title="Tema", file=PDF)
    assert get_theme(db_session, tid).title == "Tema"
    with pytest.raises(ThemeNotFoundError):
        get_theme(db_session, tid + 1)
