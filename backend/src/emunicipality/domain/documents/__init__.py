"""Documents domain module - document request status values"""

from .document_status import DocumentStatus, VALID_STATUSES, is_valid_status, leaves_pending

__all__ = [
    "DocumentStatus",
    "VALID_STATUSES",
    "is_valid_status",
    "leaves_pending",
]
