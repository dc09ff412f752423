"""
Authentication routes (login, logout, me, credential update)
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from profoli.api.deps import get_db, AuthSession, require_user
from profoli.application.users import (
    AuthenticateUserUseCase, UpdateCredentialsUseCase,
    AuthenticationError, UserValidationError,
)


router = APIRouter(prefix="/api", tags=["auth"])


# === Request models ===

class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(alias="currentPassword")
    username: str | None = None
    password: str | None = None


# === Endpoints ===

@router.post("/login")
def login(request: Request, req: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = AuthenticateUserUseCase(db).execute(req.username, req.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))

    auth = AuthSession.start(request, user)
    return auth.to_public()


@router.post("/logout")
def logout(request: Request):
    AuthSession.end(request)
    return {"success": True}


@router.get("/me")
def me(auth: AuthSession = Depends(require_user)):
    return auth.to_public()


@router.put("/users/{user_id}")
def update_user(
    user_id: int,
    req: UpdateUserRequest,
    request: Request,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(require_user),
):
    """Trocar usuário/senha (outra conta só com perfil admin)"""
    if user_id != auth.user_id and not auth.is_admin:
        raise HTTPException(status_code=403, detail="Acesso restrito a administradores")

    try:
        user = UpdateCredentialsUseCase(db).execute(
            user_id=user_id,
            current_password=req.current_password,
            username=req.username,
            password=req.password,
        )
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except UserValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if user.id == auth.user_id:
        AuthSession.start(request, user)
    return {"success": True}
