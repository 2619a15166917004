from .base import Base
from .session import engine, SessionLocal, init_db, commit_or_raise

__all__ = ["Base", "engine", "SessionLocal", "init_db", "commit_or_raise"]
