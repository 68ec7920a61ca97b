"""
Create any missing tables without touching existing data.
Usage: python -m app.scripts.ensure_tables
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from app.config import settings
from app.database import Database


def main():
    database = Database(settings.database_url)
    try:
        created = database.ensure_tables_exist()
    finally:
        database.dispose()
    if created:
        print(f"Created tables: {', '.join(created)}")
    else:
        print("DB table check complete: all tables already exist.")


if __name__ == "__main__":
    main()
