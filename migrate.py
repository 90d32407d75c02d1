#!/usr/bin/env python3
"""
Database management script.
Creates, drops and resets the schema and seeds sample marketplace data.
"""

import asyncio
import sys
import argparse
import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from app.config import settings
from app.database import engine, AsyncSessionLocal, create_tables, drop_tables
from app.models import (
    User,
    UserRole,
    Property,
    Location,
    Listing,
    ListingStatus,
    PropertyImage,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SEED_PASSWORD = "password123"

SEED_USERS = [
    {"name": "System Administrator", "email": "admin@example.com", "role": UserRole.ADMIN},
    {"name": "Sam Seller", "email": "seller@example.com", "role": UserRole.SELLER,
     "phone": "+20 100 000 0001"},
    {"name": "Bea Buyer", "email": "buyer@example.com", "role": UserRole.BUYER},
]

SEED_LOCATIONS = [
    {"city": "Cairo", "area": "Zamalek", "address": "12 Brazil St"},
    {"city": "Cairo", "area": "Maadi", "address": "7 Road 9"},
    {"city": "Alexandria", "area": "Smouha", "address": "3 Victor Emmanuel Sq"},
]

# (property type, description, location index, price, status, image urls)
SEED_LISTINGS = [
    ("apartment", "Nile-view apartment with two bedrooms", 0, "250000.00", ListingStatus.ACTIVE,
     ["https://images.example.com/zamalek-1.jpg", "https://images.example.com/zamalek-2.jpg"]),
    ("villa", "Family villa with garden", 1, "900000.00", ListingStatus.ACTIVE,
     ["https://images.example.com/maadi-1.jpg"]),
    ("apartment", "Sea-side studio", 2, "120000.00", ListingStatus.SOLD, []),
]


class MigrationManager:
    """Manages schema lifecycle and seed data."""

    def __init__(
        self,
        target_engine: Optional[AsyncEngine] = None,
        session_factory: Optional[async_sessionmaker] = None
    ):
        self.engine = target_engine or engine
        self.session_factory = session_factory or AsyncSessionLocal

    async def create(self) -> None:
        logger.info("Creating database tables")
        await create_tables(self.engine)

    async def drop(self) -> None:
        logger.warning("Dropping all database tables")
        await drop_tables(self.engine)

    async def seed_database(self) -> bool:
        """
        Seed the database with sample users, properties and listings.

        Returns:
            False when seed data is already present, True otherwise
        """
        logger.info("Seeding database with sample data")

        async with self.session_factory() as session:
            try:
                result = await session.execute(
                    select(User).where(User.email == SEED_USERS[0]["email"])
                )
                if result.scalar_one_or_none():
                    logger.info("Seed data already present, skipping seed")
                    return False

                users = {}
                for data in SEED_USERS:
                    user = User(**data, is_active=True)
                    user.set_password(SEED_PASSWORD)
                    session.add(user)
                    users[data["role"]] = user

                locations = [Location(**data) for data in SEED_LOCATIONS]
                session.add_all(locations)
                await session.flush()

                seller = users[UserRole.SELLER]
                for prop_type, description, location_index, price, status, image_urls in SEED_LISTINGS:
                    prop = Property(owner_id=seller.id, type=prop_type, description=description)
                    session.add(prop)
                    await session.flush()

                    listing = Listing(
                        property_id=prop.id,
                        location_id=locations[location_index].id,
                        price=Decimal(price),
                        status=status,
                    )
                    session.add(listing)
                    await session.flush()

                    for url in image_urls:
                        session.add(PropertyImage(listing_id=listing.id, image_url=url))

                await session.commit()

                logger.info("Database seeded successfully")
                for data in SEED_USERS:
                    logger.info(f"  {data['role'].value}: {data['email']} / {SEED_PASSWORD}")
                logger.warning("Seed accounts share a well-known password; do not seed production")
                return True

            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to seed database: {e}")
                raise

    async def reset_database(self) -> None:
        """Drop and recreate all tables, then seed."""
        logger.warning("Resetting database - all data will be lost!")

        if not (settings.is_development or settings.is_testing):
            raise RuntimeError("Database reset is only allowed in development or test mode")

        await self.drop()
        await self.create()
        await self.seed_database()

        logger.info("Database reset completed")


def main():
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="Database management for the Property Marketplace API")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")
    subparsers.add_parser("drop", help="Drop all tables (not in production)")
    subparsers.add_parser("seed", help="Seed database with sample data")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    manager = MigrationManager()

    async def run(coro):
        try:
            await coro
        finally:
            await manager.engine.dispose()

    try:
        if args.command == "create":
            asyncio.run(run(manager.create()))

        elif args.command == "drop":
            asyncio.run(run(manager.drop()))

        elif args.command == "seed":
            asyncio.run(run(manager.seed_database()))

        elif args.command == "reset":
            if not args.confirm:
                print("Database reset requires --confirm flag")
                return
            asyncio.run(run(manager.reset_database()))

    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
