"""
Create an account from the command line (e.g. the single ADMIN). Run from project root:
  python -m rollcall.scripts.create_user USERNAME NAME EMAIL PASSWORD [role]
Example:
  python -m rollcall.scripts.create_user admin "Site Admin" admin@example.com your-secure-password ADMIN

Goes through the same registration service as POST /api/users/register,
so the uniqueness and single-ADMIN rules apply.
"""
import argparse
import logging
import sys

from rollcall.core.database import SessionLocal
from rollcall.core.errors import ServiceError
from rollcall.models.user import ROLE_USER, ROLES
from rollcall.services.accounts import register_account

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Rollcall account.")
    parser.add_argument("username", help="Unique username")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password (at most 128 chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=ROLES)
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = register_account(
            db,
            username=args.username,
            name=args.name,
            email=args.email,
            password=args.password,
            role=args.role,
        )
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
