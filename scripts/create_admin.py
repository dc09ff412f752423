"""
Create (or reset) the panel administrator

Usage:
    python -m scripts.create_admin
    python -m scripts.create_admin --username admin --password 'nova-senha'
"""
import argparse
import logging

from profoli.application.users import EnsureUserUseCase
from profoli.auth import ROLE_ADMIN, USER_ROLES
from profoli.infrastructure.db.session import get_db

logger = logging.getLogger(__name__)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Cria ou redefine um usuário do painel")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default="admin")
    parser.add_argument("--role", default=ROLE_ADMIN, choices=USER_ROLES)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    db = next(get_db())
    try:
        user, created = EnsureUserUseCase(db).execute(args.username, args.password, role=args.role)
    finally:
        db.close()

    action = "Created" if created else "Reset"
    print(f"{action} user:")
    print(f"  Username: {user.username}")
    print(f"  Role: {user.role}")
    if args.password == "admin":
        logger.warning("Default password in use, change it with PUT /api/users/{id}")


if __name__ == "__main__":
    main()
