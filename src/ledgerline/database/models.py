"""SQLAlchemy models for ledgerline database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class CSVImport(Base):
    """Record of one committed CSV import."""

    __tablename__ = "csv_imports"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    file_name = Column(String, nullable=False)
    bank_format = Column(String, nullable=False, default="auto")
    bank_name = Column(String, nullable=True)
    company_id = Column(String, nullable=True)
    status = Column(String, nullable=False, default="completed")
    transaction_count = Column(Integer, nullable=False, default=0)
    duplicate_count = Column(Integer, nullable=False, default=0)
    error_count = Column(Integer, nullable=False, default=0)
    date_range_start = Column(Date, nullable=True)
    date_range_end = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="csv_import")


class Transaction(Base):
    """Ledger transaction model.

    ``amount`` is stored unsigned; ``type`` carries income/expense.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    payee = Column(String, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=True)
    payment_method = Column(String, nullable=False, default="other")
    check_number = Column(String, nullable=True)
    reference_number = Column(String, nullable=True)
    company_id = Column(String, nullable=True)
    source = Column(String, nullable=True)
    source_file = Column(String, nullable=True)
    bank_name = Column(String, nullable=True)
    original_description = Column(String, nullable=True)
    csv_import_id = Column(Integer, ForeignKey("csv_imports.id"), nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    csv_import = relationship("CSVImport", back_populates="transactions")


class ClassificationRule(Base):
    """User-defined keyword classification rule."""

    __tablename__ = "classification_rules"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    pattern = Column(String, nullable=False)
    category = Column(String, nullable=False)
    priority = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
