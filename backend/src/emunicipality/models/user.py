"""User SQLAlchemy model"""

from sqlalchemy import Column, Integer, Text, CheckConstraint, TIMESTAMP
from sqlalchemy.sql import func

from .base import Base


class User(Base):
    """Identity record for a citizen, employee or administrator.

    Username and email are each globally unique. The password column holds
    whatever credential the caller supplied; this service never hashes it.
    """
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(Text, nullable=False, unique=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    role = Column(Text, nullable=False, server_default="citizen")
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "role IN ('citizen', 'admin', 'employee')",
            name="ck_users_role"
        ),
    )
