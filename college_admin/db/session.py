# college_admin/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from college_admin.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI serves sync routes from a thread pool
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables():
    # Models must be registered on Base before create_all
    import college_admin.db  # noqa: F401
    from college_admin.db.base import Base

    Base.metadata.create_all(bind=engine)
