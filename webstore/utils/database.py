"""
Database engine, session factory and declarative base
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from webstore.config import DATABASE_URL, DB_ECHO

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=DB_ECHO, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session and close it when the caller is done"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """Create all tables registered on Base"""
    # models must be imported so their tables are registered on Base.metadata
    import webstore.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind=None):
    """Drop all tables registered on Base"""
    import webstore.models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)
