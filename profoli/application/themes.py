"""
Theme use cases - study materials (apostilas) with file upload
"""
import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from profoli.application.errors import NotFoundError
from profoli.infrastructure.db.models import Theme, AttendanceRecord, Justification
from profoli.infrastructure.storage.local import LocalFileStorage

logger = logging.getLogger(__name__)


class ThemeValidationError(ValueError):
    pass


class ThemeNotFoundError(NotFoundError):
    pass


@dataclass(frozen=True)
class FileUpload:
    """Arquivo já lido da requisição multipart"""
    filename: str
    content_type: str | None
    content: bytes


def _clean(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


class CreateThemeUseCase:
    def __init__(self, db: Session, storage: LocalFileStorage):
        self.db = db
        self.storage = storage

    def execute(
        self,
        title: str,
        file: FileUpload | None,
        speaker: str | None = None,
        event_date: date | None = None,
        cover: FileUpload | None = None,
    ) -> int:
        """
        Criar tema

        Raises:
            ThemeValidationError: título ou arquivo ausente
            StorageError: arquivo recusado pelo storage
        """
        title = (title or "").strip()
        if not title:
            raise ThemeValidationError("O título é obrigatório.")
        if file is None:
            raise ThemeValidationError("Nenhum arquivo enviado")

        file_url = self.storage.save(file.content, file.filename, file.content_type)
        cover_url = None
        if cover is not None:
            cover_url = self.storage.save(cover.content, cover.filename, cover.content_type)

        theme = Theme(
            title=title,
            speaker=_clean(speaker),
            event_date=event_date,
            file_url=file_url,
            file_type=file.content_type or "application/octet-stream",
            cover_image_url=cover_url,
        )
        self.db.add(theme)
        self.db.flush()
        self.db.commit()

        logger.info(f"Theme #{theme.id} created with file {file.filename!r}")
        return theme.id


class UpdateThemeUseCase:
    """
    Use case: editar tema

    Arquivo novo substitui file_url/file_type; sem arquivo novo, um
    file_url informado explicitamente é mantido.
    """

    def __init__(self, db: Session, storage: LocalFileStorage):
        self.db = db
        self.storage = storage

    def execute(
        self,
        theme_id: int,
        title: str,
        speaker: str | None = None,
        event_date: date | None = None,
        file_url: str | None = None,
        file: FileUpload | None = None,
        cover: FileUpload | None = None,
    ) -> None:
        theme = self.db.query(Theme).filter(Theme.id == theme_id).first()
        if not theme:
            raise ThemeNotFoundError("Tema não encontrado")

        title = (title or "").strip()
        if not title:
            raise ThemeValidationError("O título é obrigatório.")

        theme.title = title
        theme.speaker = _clean(speaker)
        theme.event_date = event_date

        replaced: list[str | None] = []
        if file is not None:
            replaced.append(theme.file_url)
            theme.file_url = self.storage.save(file.content, file.filename, file.content_type)
            theme.file_type = file.content_type or "application/octet-stream"
        elif _clean(file_url) and file_url.strip() != theme.file_url:
            replaced.append(theme.file_url)
            theme.file_url = file_url.strip()

        if cover is not None:
            replaced.append(theme.cover_image_url)
            theme.cover_image_url = self.storage.save(cover.content, cover.filename, cover.content_type)

        self.db.commit()

        # arquivos substituídos só saem do disco depois do commit
        for url in replaced:
            self.storage.delete(url)


class DeleteThemeUseCase:
    """Remove o tema com suas presenças, justificativas e arquivos enviados"""

    def __init__(self, db: Session, storage: LocalFileStorage):
        self.db = db
        self.storage = storage

    def execute(self, theme_id: int) -> None:
        theme = self.db.query(Theme).filter(Theme.id == theme_id).first()
        if not theme:
            raise ThemeNotFoundError("Tema não encontrado")

        self.db.query(AttendanceRecord).filter(
            AttendanceRecord.theme_id == theme_id
        ).delete(synchronize_session=False)
        self.db.query(Justification).filter(
            Justification.theme_id == theme_id
        ).delete(synchronize_session=False)
        stored_urls = (theme.file_url, theme.cover_image_url)
        self.db.delete(theme)
        self.db.commit()

        for url in stored_urls:
            self.storage.delete(url)
        logger.info(f"Theme #{theme_id} deleted")


def list_themes(db: Session) -> list[Theme]:
    return db.query(Theme).order_by(Theme.created_at.desc(), Theme.id.desc()).all()


def get_theme(db: Session, theme_id: int) -> Theme:
    theme = db.query(Theme).filter(Theme.id == theme_id).first()
    if not theme:
        raise ThemeNotFoundError("Tema não encontrado")
    return theme
