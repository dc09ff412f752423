"""
FastAPI application factory
"""
import logging
import traceback
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware

from profoli.config import get_settings
from profoli.infrastructure.db.session import check_db_connection
from profoli.api.v1 import (
    auth, attendees, public, attendance, justifications, financial, themes, stats, reports,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Última barreira: qualquer exceção vira 500 {"error": ...} com traceback no log"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return _error(500, f"Internal Server Error: {exc}")


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if not errors:
            return _error(400, "Dados inválidos")
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = first.get("msg", "Dados inválidos")
        return _error(400, f"{field}: {message}" if field else message)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Database error on {request.method} {request.url.path}")
        orig = getattr(exc, "orig", None)
        return _error(500, str(orig or exc))


def create_app() -> FastAPI:
    """
    Application factory - cria e configura o app FastAPI

    Returns:
        app FastAPI configurado
    """
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title="PROFOLI",
        debug=settings.DEBUG,
    )

    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY
    )
    _install_exception_handlers(app)

    # Arquivos enviados (apostilas, capas)
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=str(upload_dir), check_dir=False),
        name="uploads",
    )

    app.include_router(auth.router)
    app.include_router(attendees.router)
    app.include_router(public.router)
    app.include_router(attendance.router)
    app.include_router(justifications.router)
    app.include_router(financial.router)
    app.include_router(themes.router)
    app.include_router(stats.router)
    app.include_router(reports.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (verifica o banco)"""
        check_db_connection()
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "profoli.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
