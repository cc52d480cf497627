"""
python -m scripts.seed_demo
"""

import sys

sys.path.insert(0, ".")

from dotenv import load_dotenv
load_dotenv()

from app.database import SessionLocal, init_db
from app.services.demo_seed import seed_demo_data


def seed():
    """Create tables if needed and insert the demo client."""
    init_db()
    db = SessionLocal()

    try:
        client = seed_demo_data(db)
        if client:
            print(f"Seeded demo client: {client.id} - {client.name}")
        else:
            print("Demo client already present")
    except Exception as e:
        print(f"Error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
