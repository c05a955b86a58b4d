"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from topup_server.infrastructure.database.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"
    __table_args__ = (CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),)

    id = Column(String(128), primary_key=True, default=generate_uuid)
    email = Column(String(255), index=True)
    display_name = Column(String(100))
    role = Column(String(20), nullable=False, default="user")
    balance = Column(BigInteger, nullable=False, default=0)
    balance_version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    balance_logs = relationship("BalanceLog", back_populates="user")


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    order_id = Column(String(100), unique=True, nullable=False, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    service_id = Column(String(100))
    service_name = Column(String(255))
    amount = Column(BigInteger, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    gateway_response_payload = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class BalanceLog(Base):
    __tablename__ = "balance_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(128), ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    action = Column(String(20), nullable=False)  # add, subtract, set
    reason = Column(String(255))
    order_id = Column(String(100), index=True)
    previous_balance = Column(BigInteger, nullable=False)
    new_balance = Column(BigInteger, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    user = relationship("User", back_populates="balance_logs")
