"""Pet shop management CLI.

Creates or drops the database schema and seeds the first admin account.

Usage:
    python src/manage.py setup-db     # Create all tables
    python src/manage.py drop-db      # Drop all tables
    python src/manage.py seed-admin   # Create the admin from PETSHOP_ADMIN_* settings
"""

import argparse
import sys


def _initialized_domain():
    from petshop.domain import petshop

    petshop.init()
    return petshop


def setup_database():
    from petshop.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating petshop database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from petshop.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping petshop database schema...")
    drop_db(domain)
    print("Done.")


def seed_admin() -> int:
    """Register the configured admin account unless it already exists."""
    from petshop import config
    from petshop.identity import sessions
    from petshop.identity.user import Role, User

    if not config.ADMIN_PASSWORD:
        print("PETSHOP_ADMIN_PASSWORD is not set; skipping admin seed.")
        return 1

    domain = _initialized_domain()
    with domain.domain_context():
        if domain.repository_for(User).by_email(config.ADMIN_EMAIL):
            print(f"Admin {config.ADMIN_EMAIL} already exists.")
            return 0

        sessions.register(
            config.ADMIN_EMAIL,
            config.ADMIN_PASSWORD,
            first_name="Admin",
            last_name="User",
            role=Role.ADMIN.value,
        )
    print(f"Admin {config.ADMIN_EMAIL} created.")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Pet shop management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-admin", help="Create the admin account from settings")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-admin":
        sys.exit(seed_admin())
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
