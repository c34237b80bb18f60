"""Storefront database management CLI.

Creates and drops the database schema for the configured provider. With the
default in-memory provider there is nothing to do; set PROTEAN_ENV=production
to target PostgreSQL.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def setup_database():
    """Create the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    logger.info("Initializing domain", domain=storefront.name)
    storefront.init()
    setup_db(storefront)
    logger.info("Database schema ready", domain=storefront.name)


def drop_database():
    """Drop the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    logger.info("Initializing domain", domain=storefront.name)
    storefront.init()
    drop_db(storefront)
    logger.info("Database schema dropped", domain=storefront.name)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
