"""SQLAlchemy models for txrules database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(DateTime, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False)
    type = Column(String, nullable=False)
    bank_account = Column(String, nullable=False)
    category = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    is_internal = Column(Boolean, default=False, nullable=False)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class TransactionRule(Base):
    """Transaction rule model.

    The filter tree and the action are stored as JSON documents.
    """

    __tablename__ = "transaction_rules"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    filter = Column(JSON, nullable=False)
    action = Column(JSON, nullable=False)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
