from passlib.context import CryptContext
from sqlalchemy.orm import Session

from profoli.infrastructure.db.models import User

ROLE_ADMIN = "admin"
ROLE_STANDARD = "standard"

USER_ROLES = (ROLE_ADMIN, ROLE_STANDARD)

# pbkdf2_sha256: sem dependências nativas
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)

def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()
