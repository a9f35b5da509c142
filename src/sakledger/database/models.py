"""SQLAlchemy models for the sakledger store."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class KVRecord(Base):
    """One JSON document stored under a key."""

    __tablename__ = "kv_records"

    key = Column(String, primary_key=True)
    # NULL marks a removed key; the row keeps its version
    value = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=1)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


def create_store_engine(database_url: str) -> Engine:
    """Create an engine and make sure the schema exists."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    return sessionmaker(bind=engine)
