"""
FastAPI dependencies (DB session, authentication)
"""
from dataclasses import dataclass
from datetime import date

from fastapi import Depends, Request, HTTPException, status

from profoli.auth import ROLE_ADMIN
from profoli.infrastructure.db.session import get_db as _get_db
from profoli.infrastructure.db.models import User


# Re-export get_db para conveniência
get_db = _get_db

SESSION_KEY = "auth"


@dataclass(frozen=True)
class AuthSession:
    """
    Usuário logado, guardado na sessão assinada

    Criado no login (start), apagado no logout (end).
    """
    user_id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def to_public(self) -> dict:
        return {"id": self.user_id, "username": self.username, "role": self.role}

    @classmethod
    def start(cls, request: Request, user: User) -> "AuthSession":
        auth = cls(user_id=user.id, username=user.username, role=user.role)
        request.session[SESSION_KEY] = {
            "user_id": auth.user_id,
            "username": auth.username,
            "role": auth.role,
        }
        return auth

    @staticmethod
    def end(request: Request) -> None:
        request.session.clear()


def get_auth_session(request: Request) -> AuthSession | None:
    """AuthSession da requisição, ou None se ninguém está logado"""
    data = request.session.get(SESSION_KEY)
    if not data or not data.get("user_id"):
        return None
    return AuthSession(
        user_id=data["user_id"],
        username=data.get("username", ""),
        role=data.get("role", ""),
    )


def require_user(auth: AuthSession | None = Depends(get_auth_session)) -> AuthSession:
    """
    Raises:
        HTTPException(401): se não estiver logado
    """
    if auth is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return auth


def require_admin(auth: AuthSession = Depends(require_user)) -> AuthSession:
    """
    Raises:
        HTTPException(403): usuário sem perfil admin
    """
    if not auth.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito a administradores"
        )
    return auth


# === Filtros opcionais vindos da query string ===
# O painel manda "?date=&theme_id=" antes de escolher a sessão: vazio = sem filtro.

def parse_optional_date(value: str | None) -> date | None:
    """
    Raises:
        HTTPException(400): data fora do formato AAAA-MM-DD
    """
    value = (value or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Data inválida: {value}")


def parse_optional_int(value: str | None, field: str) -> int | None:
    """
    Raises:
        HTTPException(400): valor não numérico
    """
    value = (value or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"{field} inválido: {value}")
