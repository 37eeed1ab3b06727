"""
Register a user from the command line. Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD
Example:
  python -m app.scripts.create_user alice alice@example.com secret1
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.database import SessionLocal
from app.core.errors import ServiceError
from app.schemas.users import UserCreate
from app.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Register a Postboard user.")
    parser.add_argument("username", help="Username (3-255 chars, unique)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (6-128 chars)")
    args = parser.parse_args(argv)

    try:
        body = UserCreate(
            username=args.username.strip(),
            email=args.email.strip(),
            password=args.password,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(loc) for loc in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_user(db, body.username, body.email, body.password)
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created user '{user.username}' with id {user.id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
