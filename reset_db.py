#!/usr/bin/env python3
"""
Drop and recreate the ``books`` and ``customers`` tables.

This script DESTROYS all stored books and customers.  It opens the store
configured through the environment (DB_BACKEND, DATABASE_URL, MYSQL_*)
and runs the schema initializer once.

Usage:
    python reset_db.py --yes
    python reset_db.py --db ./bookstore.db --yes

Without --yes you will be asked to confirm.
"""

import argparse
import dataclasses
import logging
import sys

from bookstore_api.app.core.config import settings
from bookstore_api.app.core.db import open_database, reset_schema
from bookstore_api.app.core.logging_config import setup_logging


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Reset the Bookstore API schema (drops all data).")
    ap.add_argument("--db", help="SQLite database file; forces the sqlite backend.")
    ap.add_argument("--yes", action="store_true", help="Do not ask for confirmation.")
    args = ap.parse_args(argv)

    setup_logging(settings.log_level, settings.log_file or None)

    config = settings
    if args.db:
        config = dataclasses.replace(settings, db_backend="sqlite", database_url=args.db)

    if not args.yes:
        answer = input("This drops the books and customers tables. Continue? [y/N] ")
        if answer.strip().lower() not in {"y", "yes"}:
            print("[!] Aborted.", file=sys.stderr)
            return 1

    db = open_database(config)
    try:
        reset_schema(db)
    except Exception:
        logging.getLogger(__name__).exception("Schema reset failed")
        return 2
    finally:
        db.close()
    print("[+] Schema reset complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
