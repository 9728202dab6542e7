"""Document SQLAlchemy model

Document represents a citizen's request for a document of a given type.
"""

from sqlalchemy import Column, Integer, Text, ForeignKey, CheckConstraint, Index, TIMESTAMP
from sqlalchemy.sql import func

from .base import Base


class Document(Base):
    """Document request linking a User to a DocumentType.

    Foreign keys are declared RESTRICT, but referential checks happen in the
    service layer before every write. SQLite only enforces them with
    PRAGMA foreign_keys=ON.
    """
    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_user_id", "user_id"),
        Index("ix_documents_doctype_id", "doctype_id"),
        Index("ix_documents_request_date", "request_date"),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'in_progress')",
            name="ck_documents_status"
        ),
    )

    document_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False)
    doctype_id = Column(Integer, ForeignKey("document_types.doctype_id", ondelete="RESTRICT"), nullable=False)
    status = Column(Text, nullable=False, server_default="pending")
    request_date = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    issue_date = Column(TIMESTAMP(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
