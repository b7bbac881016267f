"""SQLAlchemy models for abafile database."""

from datetime import datetime, UTC
from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Provider(Base):
    """Provider (payee) model with its bank details."""

    __tablename__ = "providers"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    bsb = Column(String, nullable=True)
    account_number = Column(String, nullable=True)
    account_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    payment_items = relationship("PaymentItem", back_populates="provider")


class PaymentBatch(Base):
    """Payment batch model."""

    __tablename__ = "payment_batches"

    id = Column(Integer, primary_key=True)
    batch_number = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    items = relationship(
        "PaymentItem",
        back_populates="batch",
        cascade="all, delete-orphan",
        order_by="PaymentItem.id",
    )


class PaymentItem(Base):
    """Payment item model. Amount is stored in cents."""

    __tablename__ = "payment_items"

    id = Column(Integer, primary_key=True)
    batch_id = Column(Integer, ForeignKey("payment_batches.id"), nullable=False)
    provider_id = Column(Integer, ForeignKey("providers.id"), nullable=False)
    provider_name = Column(String, nullable=False)
    amount = Column(BigInteger, nullable=False)
    reference = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    batch = relationship("PaymentBatch", back_populates="items")
    provider = relationship("Provider", back_populates="payment_items")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
