#!/usr/bin/env python3
"""
Create Admin Script

Creates an admin account, or promotes an existing account to admin.
No GraphQL operation can grant the first admin role, so deployments run
this once after migrating.

USAGE:
    python scripts/create_admin.py --username admin --email admin@example.com
    python scripts/create_admin.py --email alice@example.com --promote

The password is read interactively unless --password is given.
"""

import argparse
import getpass
import logging
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.database import SessionLocal, create_tables
from app.models import User, UserRole
from app.services.security import hash_password

logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
logger = logging.getLogger("create_admin")


def promote(db: Session, email: str) -> User:
    """Give an existing user the admin role."""
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user is None:
        raise SystemExit(f"No user registered with {email}")

    user.role = UserRole.ADMIN.value
    db.commit()
    db.refresh(user)
    return user


def create_admin(db: Session, username: str, email: str, password: str) -> User:
    """Insert a new user with the admin role."""
    stmt = select(User).where((User.email == email) | (User.username == username))
    if db.execute(stmt).first() is not None:
        raise SystemExit("A user with this email or username already exists; use --promote")

    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
        role=UserRole.ADMIN.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create or promote an admin user")
    parser.add_argument("--email", required=True, help="Email of the admin account")
    parser.add_argument("--username", help="Username (required unless --promote)")
    parser.add_argument("--password", help="Password (prompted when omitted)")
    parser.add_argument(
        "--promote",
        action="store_true",
        help="Promote an existing user instead of creating one",
    )
    args = parser.parse_args()

    if not args.promote and not args.username:
        parser.error("--username is required when creating an admin")

    create_tables()
    db = SessionLocal()

    try:
        if args.promote:
            user = promote(db, args.email)
        else:
            password = args.password or getpass.getpass("Password: ")
            user = create_admin(db, args.username, args.email, password)

        logger.info(f"User {user.id} ({user.username}) now has the admin role")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
