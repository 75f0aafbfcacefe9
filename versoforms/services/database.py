from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy.engine import Engine

from ..config import DATABASE_URL
# Imported so their tables are registered on SQLModel.metadata
from ..models.submission import Submission  # noqa: F401
from ..models.user import User  # noqa: F401
from ..models.user_role import UserRole  # noqa: F401

def build_engine(url: str = DATABASE_URL) -> Engine:
    return create_engine(url, pool_pre_ping=True)

def create_db_and_tables(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)

def open_session(engine: Engine) -> Session:
    return Session(engine, expire_on_commit=False)
