"""Database engine and session dependency"""

import os

from sqlalchemy import create_engine
from sqlmodel import Session

from event_portal.config import config

# Database URL from config
DATABASE_URL = config["database_url"]

if not DATABASE_URL:
    raise ValueError(
        "DATABASE_URL environment variable is not set. "
        "Set DATABASE_URL in the deployment environment or the local .env file."
    )

# SQLite needs cross-thread access because FastAPI runs sync dependencies in a threadpool
connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(
    DATABASE_URL,
    echo=os.getenv("DEBUG", "false").lower() == "true",
    connect_args=connect_args,
)


def get_db():
    """Get database session"""
    with Session(engine) as session:
        yield session
