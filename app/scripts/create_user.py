"""
Create a user (e.g. the first admin). Roles cannot be chosen at signup, so
admins are provisioned here. Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD FIRST_NAME LAST_NAME [--company C] [--role user|admin]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password Ada Admin --role admin
"""
import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.database import SessionLocal
from app.core.security import EMAIL_MAX_LEN, NAME_MAX_LEN, PASSWORD_MAX_LEN
from app.models.user import USER_ROLES
from app.services.accounts import EmailAlreadyRegisteredError, register_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Toolhub user outside the signup flow.")
    parser.add_argument("email", help=f"Email (1-{EMAIL_MAX_LEN} chars, stored lowercase)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("first_name", help="First name")
    parser.add_argument("last_name", help="Last name")
    parser.add_argument("--company", default=None, help="Optional company name")
    parser.add_argument("--role", default="user", choices=USER_ROLES)
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email or len(email) > EMAIL_MAX_LEN:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be 1-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1
    first_name, last_name = args.first_name.strip(), args.last_name.strip()
    if not first_name or not last_name or max(len(first_name), len(last_name)) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = register_user(
            db,
            email=email,
            password=args.password,
            first_name=first_name,
            last_name=last_name,
            company=args.company,
            role=args.role,
        )
    except EmailAlreadyRegisteredError:
        print(f"User '{email.lower()}' already exists.", file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        print(f"Could not create user: {e.__class__.__name__}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
