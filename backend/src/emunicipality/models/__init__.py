"""SQLAlchemy Models for eMunicipality"""

from .base import Base
from .user import User
from .document_type import DocumentType
from .document import Document

__all__ = [
    "Base",
    "User",
    "DocumentType",
    "Document",
]
