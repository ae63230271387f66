"""Checkout database management CLI.

Creates or drops the orders table of the durable order store named by
ORDERS_STORE_URL (and ORDERS_TABLE, if set).

Usage:
    python src/manage.py setup-db   # Create the orders table
    python src/manage.py drop-db    # Drop the orders table
"""

import argparse
import sys

from protean.exceptions import ConfigurationError

from ordering.config import Settings
from ordering.order.store import SqlOrderStore


def _store(environ=None) -> tuple[Settings, SqlOrderStore]:
    settings = Settings.from_env(environ)
    return settings, SqlOrderStore(settings.store_url, table_name=settings.orders_table)


def setup_database(environ=None):
    """Create the orders table if it does not exist yet."""
    settings, store = _store(environ)
    print(f"Creating table '{settings.orders_table}' in {settings.region}...")
    store.create_schema()
    print("Done.")


def drop_database(environ=None):
    """Drop the orders table."""
    settings, store = _store(environ)
    print(f"Dropping table '{settings.orders_table}' in {settings.region}...")
    store.drop_schema()
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Checkout database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create the orders table")
    subparsers.add_parser("drop-db", help="Drop the orders table")

    args = parser.parse_args(argv)

    try:
        if args.command == "setup-db":
            setup_database()
        elif args.command == "drop-db":
            drop_database()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
