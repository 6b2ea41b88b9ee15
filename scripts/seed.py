"""
Seed the database with demo users.

Usage:
    python -m scripts.seed            # replace all users with the demo set
    python -m scripts.seed --keep     # add the demo users without clearing
"""
from __future__ import annotations

import argparse
import asyncio
import logging

from app.core.logging import configure_logging
from app.crud.repository import Repository
from app.db.session import engine, session_scope
from app.models.user import User

logger = logging.getLogger("scripts.seed")

SEED_USERS: list[dict[str, object]] = [
    {"name": "John Doe", "email": "john.doe@example.com", "email_verified": False},
    {"name": "Jane Smith", "email": "jane.smith@example.com", "email_verified": True},
    {"name": "Bob Johnson", "email": "bob.johnson@example.com", "email_verified": True},
    {"name": "Alice Williams", "email": "alice.williams@example.com", "email_verified": False},
    {"name": "Charlie Brown", "email": "charlie.brown@example.com", "email_verified": True},
    {"name": "Diana Prince", "email": "diana.prince@example.com", "email_verified": True},
    {"name": "Ethan Hunt", "email": "ethan.hunt@example.com", "email_verified": False},
    {"name": "Fiona Green", "email": "fiona.green@example.com", "email_verified": True},
    {"name": "George Miller", "email": "george.miller@example.com", "email_verified": True},
    {"name": "Hannah Davis", "email": "hannah.davis@example.com", "email_verified": False},
]


async def seed(*, keep_existing: bool = False) -> int:
    async with session_scope() as session:
        users = Repository(User, session)
        if not keep_existing:
            removed = await users.delete_many(User.id.is_not(None))
            logger.info("Cleared %d existing users", len(removed))
        created = await users.create_many(SEED_USERS)
    await engine.dispose()
    return len(created)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--keep", action="store_true", help="do not clear existing users first")
    args = parser.parse_args()

    configure_logging()
    count = asyncio.run(seed(keep_existing=args.keep))
    logger.info("Inserted %d users", count)


if __name__ == "__main__":
    main()
