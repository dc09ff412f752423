"""
Theme API endpoints (apostilas) - multipart upload
"""
from fastapi import APIRouter, Depends, HTTPException, Form, UploadFile, File
from sqlalchemy.orm import Session

from profoli.api.deps import get_db, require_user, parse_optional_date
from profoli.application.themes import (
    CreateThemeUseCase, UpdateThemeUseCase, DeleteThemeUseCase,
    ThemeValidationError, ThemeNotFoundError, FileUpload,
    list_themes, get_theme,
)
from profoli.infrastructure.db.models import Theme
from profoli.infrastructure.storage.local import LocalFileStorage, StorageError, get_storage


router = APIRouter(prefix="/api/themes", tags=["themes"])


def theme_to_dict(theme: Theme) -> dict:
    return {
        "id": theme.id,
        "title": theme.title,
        "speaker": theme.speaker,
        "event_date": theme.event_date.isoformat() if theme.event_date else None,
        "file_url": theme.file_url,
        "file_type": theme.file_type,
        "cover_image_url": theme.cover_image_url,
        "created_at": theme.created_at.isoformat() if theme.created_at else None,
    }


async def _read_upload(upload: UploadFile | None) -> FileUpload | None:
    # navegador manda a parte vazia quando nenhum arquivo foi escolhido
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    return FileUpload(
        filename=upload.filename,
        content_type=upload.content_type,
        content=content,
    )


@router.get("")
def get_themes(db: Session = Depends(get_db)):
    """Lista pública de apostilas"""
    return [theme_to_dict(t) for t in list_themes(db)]


@router.get("/{theme_id}")
def get_theme_detail(theme_id: int, db: Session = Depends(get_db)):
    try:
        theme = get_theme(db, theme_id)
    except ThemeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return theme_to_dict(theme)


@router.post("")
async def create_theme(
    title: str = Form(""),
    speaker: str | None = Form(None),
    event_date: str | None = Form(None),
    file: UploadFile | None = File(None),
    cover: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage),
    auth=Depends(require_user),
):
    try:
        theme_id = CreateThemeUseCase(db, storage).execute(
            title=title,
            file=await _read_upload(file),
            speaker=speaker,
            event_date=parse_optional_date(event_date),
            cover=await _read_upload(cover),
        )
    except (ThemeValidationError, StorageError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"id": theme_id}


@router.put("/{theme_id}")
async def update_theme(
    theme_id: int,
    title: str = Form(""),
    speaker: str | None = Form(None),
    event_date: str | None = Form(None),
    file_url: str | None = Form(None),
    file: UploadFile | None = File(None),
    cover: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage),
    auth=Depends(require_user),
):
    try:
        UpdateThemeUseCase(db, storage).execute(
            theme_id=theme_id,
            title=title,
            speaker=speaker,
            event_date=parse_optional_date(event_date),
            file_url=file_url,
            file=await _read_upload(file),
            cover=await _read_upload(cover),
        )
    except ThemeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (ThemeValidationError, StorageError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True}


@router.delete("/{theme_id}")
def delete_theme(
    theme_id: int,
    db: Session = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage),
    auth=Depends(require_user),
):
    try:
        DeleteThemeUseCase(db, storage).execute(theme_id)
    except ThemeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
