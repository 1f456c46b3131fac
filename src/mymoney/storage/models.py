"""SQLAlchemy models for the local client store."""

from datetime import datetime, UTC
from sqlalchemy import Column, String, DateTime, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class StoredItem(Base):
    """One persisted key/value pair."""

    __tablename__ = "stored_items"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


def create_session_factory(database_url: str) -> sessionmaker:
    """Create engine, ensure tables exist and return a session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
