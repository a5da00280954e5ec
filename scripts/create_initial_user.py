"""Utility script to create the first admin account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from thriftdesk.application.use_cases.users import create_user
from thriftdesk.domain.entities import ROLE_ADMIN, ROLES
from thriftdesk.domain.exceptions import DomainError
from thriftdesk.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the ThriftDesk API.",
    )
    parser.add_argument(
        "--username",
        default="admin",
        help="Login name of the user (default: admin)",
    )
    parser.add_argument(
        "--email",
        default=None,
        help="Email address of the user (optional)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=ROLES,
        help=f"Role assigned to the user (default: {ROLE_ADMIN})",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the user. Prompted for when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            username=args.username,
            email=args.email,
            role=args.role,
            password=password,
        )
    except DomainError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Role: {user.role}\n"
            f"  Email: {user.email or '-'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
