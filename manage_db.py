#!/usr/bin/env python3
"""
Database management script for local setup.

Usage:
    python manage_db.py seed    # drop the collections and load the demo league
    python manage_db.py drop    # drop the collections only
"""
import logging
import sys

from pymongo.errors import PyMongoError

from arena.app import create_app
from arena.seed import seed_database

logger = logging.getLogger('arena')


def main(command: str):
    app = create_app()
    if command == 'seed':
        seed_database(app.store)
        logger.info("Database seeded")
    elif command == 'drop':
        app.store.drop_all()
        logger.info("Collections dropped")
    else:
        print(f"Unknown command: {command}")
        print("Usage: python manage_db.py [seed|drop]")
        sys.exit(1)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        main(sys.argv[1] if len(sys.argv) > 1 else 'seed')
    except PyMongoError as e:
        logger.error(f"Error talking to the entity store: {e}")
        sys.exit(1)
