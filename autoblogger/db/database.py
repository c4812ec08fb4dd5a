# /autoblogger/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .base_class import Base

# The whole process shares one SQLite file through a small, fixed pool.
# When every connection is checked out, new requests wait for one to free up.
POOL_SIZE = 10
POOL_TIMEOUT_SECONDS = 3600
# How long SQLite itself waits on a locked database file before erroring.
SQLITE_BUSY_TIMEOUT_SECONDS = 30


def create_db_engine(database_url: str) -> Engine:
    """Creates the SQLAlchemy engine with a bounded connection pool."""
    # The 'check_same_thread' argument is only needed for SQLite.
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SECONDS}
    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_size=POOL_SIZE,
        max_overflow=0,
        pool_timeout=POOL_TIMEOUT_SECONDS,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    # Each instance of the returned class is a database session.
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Creates the articles and locks tables if they do not exist yet."""
    # Importing the registry makes every model known to Base.metadata.
    from . import base  # noqa: F401
    Base.metadata.create_all(bind=engine)
