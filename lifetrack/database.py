from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base

from lifetrack.constants import DB_URL


def make_engine(url: str = DB_URL, **kwargs):
    """Create an engine; SQLite connections are shared with the scheduler thread"""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


Base = declarative_base()
