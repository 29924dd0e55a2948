"""Utility script to create an initial administrator in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from yumix.domain.entities import DEFAULT_ADMIN_PREFERENCES, Admin
from yumix.infrastructure.database import SessionLocal, initialize_database
from yumix.infrastructure.repositories import AdminRepository
from yumix.infrastructure.security import get_password_hash


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for admin creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial administrator for the YuMix API.",
    )
    parser.add_argument(
        "--name",
        default="Administrator",
        help="Full name of the administrator (default: Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address of the administrator (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password for the account. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an administrator using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Administrator password: ")
    if not password:
        raise SystemExit("No valid password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        repository = AdminRepository(session)
        if repository.get_by_email(args.email) is not None:
            raise SystemExit(f"An administrator with email {args.email} already exists.")
        admin = repository.create(
            Admin(
                id=None,
                name=args.name,
                email=args.email,
                password=get_password_hash(password),
                preferences=dict(DEFAULT_ADMIN_PREFERENCES),
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the administrator: {exc}") from exc
    finally:
        session.close()

    print(
        "Administrator created:\n"
        f"  ID: {admin.id}\n"
        f"  Name: {admin.name}\n"
        f"  Email: {admin.email}"
    )


if __name__ == "__main__":
    main()
