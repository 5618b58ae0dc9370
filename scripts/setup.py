#!/usr/bin/env python3
"""Database setup for the Gotz Portal API: migrations, admin seeding and password resets.

Usage:
    python scripts/setup.py                  # migrate, then seed the admin account
    python scripts/setup.py migrate
    python scripts/setup.py seed-admin       # SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD / SEED_ADMIN_NAME
    python scripts/setup.py reset-password   # RESET_PASSWORD_EMAIL / RESET_PASSWORD_NEW / RESET_PASSWORD_NEW_EMAIL
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from alembic import command
from alembic.config import Config
from gotzportal.core.config import DEFAULT_ADMIN_EMAIL, settings
from gotzportal.core.database import close_db, get_session_factory, has_db
from gotzportal.core.exceptions import ProblemDetailsException
from gotzportal.services.user_service import UserService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run_migrations() -> None:
    """Apply every Alembic migration up to head."""
    alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))

    logger.info("Running database migrations...")
    command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations completed")


async def seed_admin() -> None:
    """Create the initial admin account; skipped when the email already exists."""
    email = os.environ.get("SEED_ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL)
    password = os.environ.get("SEED_ADMIN_PASSWORD") or settings.admin_password
    name = os.environ.get("SEED_ADMIN_NAME", "Admin")

    try:
        async with get_session_factory()() as db:
            user = await UserService(db).seed_admin(email, password, name)
    finally:
        await close_db()

    if user is not None:
        logger.info(f"Seeded user: {user.email}")


async def reset_password() -> None:
    """Reset an account's password, optionally moving it to a new email."""
    email = os.environ.get("RESET_PASSWORD_EMAIL", DEFAULT_ADMIN_EMAIL)
    new_password = os.environ.get("RESET_PASSWORD_NEW", "")
    new_email = os.environ.get("RESET_PASSWORD_NEW_EMAIL") or None

    try:
        async with get_session_factory()() as db:
            user = await UserService(db).reset_password(email, new_password, new_email)
    finally:
        await close_db()

    logger.info(f"Password updated for {user.email}. You can log in with the new password.")


def main() -> int:
    """Main setup function."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "action",
        nargs="?",
        default="all",
        choices=["all", "migrate", "seed-admin", "reset-password"],
    )
    args = parser.parse_args()

    if not has_db():
        logger.error("Missing DATABASE_URL or POSTGRES_URL.")
        return 1

    try:
        if args.action in ("all", "migrate"):
            run_migrations()
        if args.action in ("all", "seed-admin"):
            asyncio.run(seed_admin())
        if args.action == "reset-password":
            asyncio.run(reset_password())
    except ProblemDetailsException as e:
        logger.error(e.problem_details["message"])
        return 1

    logger.info("Setup completed successfully!")
    if args.action == "all":
        logger.info("You can now start the API server with: cd server && uvicorn gotzportal.main:app --reload")
    return 0


if __name__ == "__main__":
    sys.exit(main())
