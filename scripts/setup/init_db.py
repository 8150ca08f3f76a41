"""
Initialize database — creates all tables and seeds the default vehicle types.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import create_tables, engine, SessionLocal
from app.config import settings
from app.services.vehicle_type_service import seed_vehicle_types, list_vehicle_types
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError


def main():
    print("🗄️  Garage DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    # Test connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except SQLAlchemyError as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    print("✅ All tables created")

    db = SessionLocal()
    try:
        added = seed_vehicle_types(db)
        types = list_vehicle_types(db)
    finally:
        db.close()

    print(f"\n🏷️  Vehicle types ({added} added, {len(types)} total):")
    for t in types:
        print(f"   ✓ {t.name} (size {t.needed_size})")

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
