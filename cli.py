"""
Admin commands.

    budget-admin init-db
    budget-admin add-default-categories USER_ID
"""

import argparse
import asyncio
import sys
from typing import List, Optional

import config
from database import build_engine, build_sessionmaker, commit, init_models
from models import UserModel
from seeding import seed_default_categories


async def _init_db(database_url: str) -> int:
    engine = build_engine(database_url)
    try:
        await init_models(engine)
    finally:
        await engine.dispose()
    print("Database schema created")
    return 0


async def _add_default_categories(database_url: str, user_id: int) -> int:
    engine = build_engine(database_url)
    try:
        await init_models(engine)
        async with build_sessionmaker(engine)() as db:
            user = await db.get(UserModel, user_id)
            if user is None:
                print("User not found!", file=sys.stderr)
                return 1
            added = await seed_default_categories(db, user.id)
            await commit(db)
    finally:
        await engine.dispose()

    for entry in config.DEFAULT_CATEGORIES:
        if entry["name"] in added:
            print(f"Added category: {entry['name']}")
        else:
            print(f"Category '{entry['name']}' already exists for this user. Skipping.")
    print("Default categories added successfully!")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="budget-admin", description="Budget API maintenance commands")
    parser.add_argument("--database-url", default=config.DATABASE_URL, help="defaults to $DATABASE_URL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create missing tables")

    seed = sub.add_parser("add-default-categories", help="Adds default categories to a specified user.")
    seed.add_argument("user_id", type=int)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.configure_logging()

    if args.command == "init-db":
        return asyncio.run(_init_db(args.database_url))
    return asyncio.run(_add_default_categories(args.database_url, args.user_id))


if __name__ == "__main__":
    sys.exit(main())
