"""CLI script to create the tables and load the default seed data.
Usage: python scripts/seed_db.py [--database-url URL]
"""
import argparse
import asyncio
import pathlib
import sys
from typing import Optional

# Ensure `backend/` is on sys.path so `roi_api` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from roi_api.config import settings
from roi_api.database import Database
from roi_api.seed import ensure_seeded


async def main(database_url: Optional[str] = None):
    """Create tables and seed empty collections.

    Results are printed to stdout; running it again against a populated
    store inserts nothing.
    """
    url = database_url or settings.DATABASE_URL
    print(f'Using database: {url}')
    db = Database(url)
    try:
        await db.create_tables()
        async with db.session() as session:
            created = await ensure_seeded(session)
    finally:
        await db.dispose()
    print(f"Seeded departments: {created['departments']}, people: {created['people']}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--database-url', help='Override DATABASE_URL for this run')
    args = parser.parse_args()
    asyncio.run(main(database_url=args.database_url))
