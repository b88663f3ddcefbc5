# /app/db/database.py

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Where student records and class statistics live. Falls back to a local
# SQLite file when no server is configured.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./test.db")

# SQLite connections are shared with FastAPI's worker threads.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)

# One session per request or per class pass; commits are explicit.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Creates every registered table that does not exist yet."""
    from .base import Base
    Base.metadata.create_all(bind=bind or engine)


# Request-scoped session for `get_db_service`; closed once the response is sent.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
