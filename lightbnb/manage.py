"""
Database management CLI: create tables and load the seed fixtures.
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from lightbnb.config import Settings, settings
from lightbnb.database import Database
from lightbnb.gateway import QueryGateway
from lightbnb.models import Reservation, PropertyReview
from lightbnb.repositories import BaseRepository

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str, fixtures_dir: Path = FIXTURES_DIR) -> List[Dict[str, Any]]:
    """Read one JSON fixture file (a list of records)."""
    with open(fixtures_dir / f"{name}.json", encoding="utf-8") as fh:
        return json.load(fh)


class Seeder:
    """
    Loads fixture records through the gateway.

    Fixture files carry their own ids so they can reference each other; the
    stored ids are whatever the database assigns, and references are remapped.
    """

    def __init__(self, database: Database, fixtures_dir: Path = FIXTURES_DIR):
        self.database = database
        self.fixtures_dir = fixtures_dir
        self.gateway = QueryGateway(database)
        self.reservation_repo = BaseRepository(Reservation, database.engine)
        self.review_repo = BaseRepository(PropertyReview, database.engine)

    async def already_seeded(self, users: List[Dict[str, Any]]) -> bool:
        if not users:
            return False
        return await self.gateway.get_user_with_email(users[0]["email"]) is not None

    async def seed(self) -> Dict[str, int]:
        """
        Insert users, properties, reservations and reviews.

        Returns:
            Number of rows inserted per table
        """
        users = load_fixture("users", self.fixtures_dir)
        if await self.already_seeded(users):
            logger.info("Seed users already exist, skipping seed")
            return {}

        user_ids: Dict[int, int] = {}
        for user in users:
            stored = await self.gateway.add_user(user)
            user_ids[user["id"]] = stored["id"]

        property_ids: Dict[int, int] = {}
        for prop in load_fixture("properties", self.fixtures_dir):
            stored = await self.gateway.add_property({**prop, "owner_id": user_ids[prop["owner_id"]]})
            property_ids[prop["id"]] = stored["id"]

        reservation_ids: Dict[int, int] = {}
        for reservation in load_fixture("reservations", self.fixtures_dir):
            stored = await self.reservation_repo.create({
                "guest_id": user_ids[reservation["guest_id"]],
                "property_id": property_ids[reservation["property_id"]],
                "start_date": date.fromisoformat(reservation["start_date"]),
                "end_date": date.fromisoformat(reservation["end_date"]),
            })
            reservation_ids[reservation["id"]] = stored["id"]

        reviews = load_fixture("property_reviews", self.fixtures_dir)
        for review in reviews:
            await self.review_repo.create({
                "guest_id": user_ids[review["guest_id"]],
                "property_id": property_ids[review["property_id"]],
                "reservation_id": reservation_ids.get(review.get("reservation_id")),
                "rating": review["rating"],
                "message": review.get("message", ""),
            })

        counts = {
            "users": len(user_ids),
            "properties": len(property_ids),
            "reservations": len(reservation_ids),
            "property_reviews": len(reviews),
        }
        logger.info(f"Database seeded successfully: {counts}")
        return counts


async def init_db(database: Database) -> None:
    await database.create_tables()


async def seed_db(database: Database) -> Dict[str, int]:
    return await Seeder(database).seed()


async def reset_db(database: Database, config: Settings) -> Dict[str, int]:
    """Drop and recreate every table, then seed."""
    if not (config.is_development or config.is_testing):
        raise RuntimeError("Database reset is only allowed in development or test mode")

    logger.warning("Resetting database - all data will be lost!")
    await database.drop_tables()
    await database.create_tables()
    return await Seeder(database).seed()


async def _run(command: str, config: Settings) -> None:
    database = Database.from_settings(config)
    try:
        if command == "init-db":
            await init_db(database)
        elif command == "seed":
            await seed_db(database)
        elif command == "reset":
            await reset_db(database, config)
    finally:
        await database.dispose()


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="LightBnB database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create all tables")
    subparsers.add_parser("seed", help="Load the fixture users, properties, reservations and reviews")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "reset" and not args.confirm:
        print("Database reset requires --confirm flag")
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        asyncio.run(_run(args.command, settings))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
