"""
Database maintenance commands.

Usage:
    python -m tinylink_app.database.manage init    # create the links table
    python -m tinylink_app.database.manage check   # connectivity, tables, link count
"""

import argparse
import sys

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from tinylink_app.config import settings
from tinylink_app.database.connection import Base, SessionLocal, engine
from tinylink_app.models.link import Link


def init_db() -> int:
    """Create all tables that do not exist yet"""
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        print(f"✗ Error: {e}")
        return 1
    print("✓ Database initialized successfully")
    return 0


def check_db() -> int:
    """Report connectivity, table names and the number of links"""
    print("Testing database connection...")
    db = SessionLocal()
    try:
        db.execute(select(1))
        print("✓ DB connection OK")

        tables = inspect(engine).get_table_names()
        print(f"✓ Tables: {tables}")

        count = db.scalar(select(func.count()).select_from(Link))
        print(f"✓ Links count: {count}")
        return 0
    except SQLAlchemyError as e:
        print(f"✗ Error: {e}")
        return 1
    finally:
        db.close()
        engine.dispose()


COMMANDS = {
    "init": init_db,
    "check": check_db,
}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=f"{settings.app_name} database tools")
    parser.add_argument("command", choices=sorted(COMMANDS))
    args = parser.parse_args(argv)
    return COMMANDS[args.command]()


if __name__ == "__main__":
    sys.exit(main())
