# shiftpay/database/database.py
"""
SQLAlchemy database setup and models.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from shiftpay.core.config import DATABASE_URL

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class ShiftRecord(Base):
    """A recorded work shift. Times are naive local wall-clock time."""

    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    shift_start = Column(DateTime, nullable=False, index=True)
    shift_end = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now)

    def __repr__(self):
        return f"<ShiftRecord(id={self.id}, start={self.shift_start}, end={self.shift_end})>"


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
