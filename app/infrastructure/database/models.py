# app/infrastructure/database/models.py

import uuid

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.sql import func

from app.infrastructure.database.session import Base


class AuditLog(Base):
    """
    Append-only audit trail. actor_id is deliberately not a foreign key:
    events must outlive the users they name.
    """

    __tablename__ = "audit_logs"

    # Insertion order; tie-breaker for equal created_at.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(Uuid(as_uuid=True), nullable=False, unique=True, default=uuid.uuid4)

    actor_id = Column(String, nullable=True, index=True)
    actor_name = Column(String, nullable=False, index=True)
    action = Column(String, nullable=False)
    details = Column(Text, nullable=False, default="")
    event_type = Column("type", String(32), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)


class User(Base):
    """Read-side view of the users table, used to enrich audit events."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    role = Column(String, nullable=False)
    status = Column(String, nullable=False, default="active")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
