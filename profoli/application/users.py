"""
User use cases - login and credential changes for panel operators
"""
import logging

from sqlalchemy.orm import Session

from profoli.auth import (
    hash_password, verify_password, get_user_by_username, ROLE_ADMIN, USER_ROLES,
)
from profoli.infrastructure.db.models import User

logger = logging.getLogger(__name__)


class AuthenticationError(ValueError):
    """Credenciais inválidas"""
    pass


class UserValidationError(ValueError):
    pass


class AuthenticateUserUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, username: str | None, password: str | None) -> User:
        """
        Validar usuário e senha (espaços nas pontas são ignorados)

        Raises:
            AuthenticationError: usuário inexistente ou senha errada
        """
        username = (username or "").strip()
        password = (password or "").strip()

        user = get_user_by_username(self.db, username) if username else None
        if not user or not verify_password(password, user.password_hash):
            logger.info(f"Login failed for user {username!r}")
            raise AuthenticationError("Invalid credentials")

        logger.info(f"Login succeeded for user {username!r}")
        return user


class UpdateCredentialsUseCase:
    """
    Use case: trocar usuário e/ou senha, confirmando a senha atual
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        user_id: int,
        current_password: str,
        username: str | None = None,
        password: str | None = None,
    ) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user or not verify_password(current_password or "", user.password_hash):
            raise AuthenticationError("Senha atual incorreta.")

        username = (username or "").strip()
        if username and username != user.username:
            taken = self.db.query(User).filter(
                User.username == username,
                User.id != user_id,
            ).first()
            if taken:
                raise UserValidationError("Este nome de usuário já está em uso.")
            user.username = username

        if password:
            if len(password.strip()) < 6:
                raise UserValidationError("A nova senha deve ter pelo menos 6 caracteres.")
            user.password_hash = hash_password(password.strip())

        self.db.commit()
        return user


class EnsureUserUseCase:
    """
    Use case: criar o usuário ou redefinir a senha se já existir
    (bootstrap do admin)
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(self, username: str, password: str, role: str = ROLE_ADMIN) -> tuple[User, bool]:
        """
        Returns:
            (user, created)
        """
        if role not in USER_ROLES:
            raise UserValidationError(f"Perfil inválido: {role}")
        username = username.strip()
        if not username or not password:
            raise UserValidationError("Usuário e senha são obrigatórios.")

        user = get_user_by_username(self.db, username)
        created = user is None
        if created:
            user = User(username=username, password_hash=hash_password(password), role=role)
            self.db.add(user)
        else:
            user.password_hash = hash_password(password)
            user.role = role
        self.db.commit()
        self.db.refresh(user)
        return user, created
