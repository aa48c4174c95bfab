"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Super Admin" admin@acme.io your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.database import SessionLocal, init_db
from app.models.user import UserRole
from app.schemas.auth import RegisterRequest
from app.services.credential_store import EmailInUseError, UserStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user without going through the API.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password (at least 6 chars, at most 72 UTF-8 bytes)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    try:
        details = RegisterRequest(name=args.name, email=args.email, password=args.password)
    except ValidationError as e:
        for err in e.errors():
            print(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}", file=sys.stderr)
        return 1

    init_db()
    db = SessionLocal()
    try:
        user = UserStore(db).create(
            name=details.name,
            email=details.email,
            password=details.password,
            role=UserRole(args.role),
        )
    except EmailInUseError as e:
        print(f"{e.message}: {details.email}", file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user id=%s email=%s role=%s", user.id, user.email, user.role.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
