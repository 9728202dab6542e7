"""DocumentType SQLAlchemy model"""

from sqlalchemy import Column, Integer, Text, TIMESTAMP
from sqlalchemy.sql import func

from .base import Base


class DocumentType(Base):
    """Catalog entry describing a kind of document citizens can request."""
    __tablename__ = "document_types"

    doctype_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
