#!/usr/bin/env python3
"""Database initialization script."""
import argparse
import asyncio

from app.database import Base, drop_db, init_db


async def main(reset: bool) -> None:
    """Create tables, optionally dropping them first."""
    if reset:
        print("Dropping existing tables...")
        await drop_db()

    print("Initializing database...")
    await init_db()

    print("Tables:")
    for table in Base.metadata.sorted_tables:
        print(f"  - {table}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Database management")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate tables")
    args = parser.parse_args()

    asyncio.run(main(args.reset))
