"""
Create a user (e.g. first admin; registration always creates role 'user'). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import AuthServiceError
from app.schemas.auth import RegisterRequest
from app.services.auth import register_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

ROLES = ["user", "agent", "admin"]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a portal user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default="user", choices=ROLES)
    parser.add_argument("--phone", default=None, help="Optional contact phone")
    args = parser.parse_args(argv)

    settings = get_settings()
    db = SessionLocal()
    try:
        body = RegisterRequest(name=args.name, email=args.email, password=args.password, phone=args.phone)
        user = register_user(db, body, bcrypt_rounds=settings.BCRYPT_ROUNDS, role=args.role)
        logger.info("Created user '%s' (id=%s) with role '%s'.", user.email, user.id, user.role)
        return 0
    except AuthServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not create user '%s': %s", args.email, e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
