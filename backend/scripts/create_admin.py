"""
Create an administrator, or promote an existing account.

The admin flag is never settable through the API, so this is how the
first admin gets bootstrapped.

Usage:
    python scripts/create_admin.py admin@example.com --name Admin --password secret
"""

import argparse
import asyncio
import getpass
import logging
import os
import sys
from typing import Optional

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.infrastructure.db.database import close_db, get_session_context, init_db
from app.infrastructure.db.repositories import UserRepository
from app.infrastructure.security.passwords import hash_password


logger = logging.getLogger("create_admin")


async def create_admin(email: str, name: str, password: Optional[str]) -> int:
    """Return the ID of the (new or promoted) admin user."""
    await init_db()
    try:
        async with get_session_context() as session:
            users = UserRepository(session)
            user = await users.get_by_email(email)

            if user:
                user.is_admin = True
                logger.info(f"Promoted existing user {user.id} to admin")
                return user.id

            if not password:
                password = getpass.getpass("Password for new admin: ")

            user = await users.create(
                email=email,
                name=name,
                hashed_password=hash_password(password),
                email_verified=True,
                is_admin=True,
            )
            logger.info(f"Created admin user {user.id}")
            return user.id
    finally:
        await close_db()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or promote an admin user")
    parser.add_argument("email")
    parser.add_argument("--name", default="Admin")
    parser.add_argument("--password", default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
    user_id = asyncio.run(create_admin(args.email, args.name, args.password))
    print(f"Admin user id: {user_id}")


if __name__ == "__main__":
    main()
