"""Initialize the database - creates the batch, trainee and history tables."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from trainops.database import engine, Base
import trainops.models  # noqa: F401 - registers all models


def init_db():
    print(f"Creating tables: {', '.join(sorted(Base.metadata.tables))}")
    Base.metadata.create_all(bind=engine)
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
