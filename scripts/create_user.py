"""Utility script to create a dashboard user and print a bearer token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from freightflow.domain.entities import User, UserRole
from freightflow.infrastructure.database import SessionLocal, initialize_database
from freightflow.infrastructure.repositories import UserRepository
from freightflow.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a FreightFlow user and print an access token.",
    )
    parser.add_argument("--name", default="Dispatcher", help="Full name of the user")
    parser.add_argument(
        "--email",
        default="dispatcher@example.com",
        help="Email address used for notifications",
    )
    parser.add_argument(
        "--role",
        default=UserRole.DISPATCHER.value,
        type=UserRole.parse,
        help="One of SHIPPER, CARRIER or DISPATCHER (default: DISPATCHER)",
    )
    parser.add_argument("--avatar-url", default=None, help="Optional avatar URL")
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = UserRepository(session).create(
            User(
                id=None,
                role=args.role,
                name=args.name,
                email=args.email,
                avatar_url=args.avatar_url,
                is_active=True,
                last_seen_at=None,
                created_at=None,
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Unable to store the user: {exc}") from exc
    finally:
        session.close()

    print(
        "User created:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.name}\n"
        f"  Role: {user.role.value}\n"
        f"  Token: {create_access_token({'sub': user.id})}"
    )


if __name__ == "__main__":
    main()
