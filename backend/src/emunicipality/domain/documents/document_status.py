"""DocumentStatus values for the document request lifecycle

Status is a plain enum: any legal value may follow any other. There is no
transition graph; handlers accept every member regardless of the current one.
"""

from enum import Enum
from typing import Optional


class DocumentStatus(str, Enum):
    """Document request status enum

    New requests always start as PENDING.
    """
    PENDING = "pending"          # Request submitted, not yet handled
    APPROVED = "approved"        # Request granted, document issued
    REJECTED = "rejected"        # Request refused
    IN_PROGRESS = "in_progress"  # Request being handled by an employee


VALID_STATUSES = tuple(status.value for status in DocumentStatus)


def is_valid_status(value: object) -> bool:
    """Check if a raw value is one of the document status values

    Example:
        >>> is_valid_status("approved")
        True
        >>> is_valid_status("archived")
        False
    """
    return isinstance(value, str) and value in VALID_STATUSES


def leaves_pending(from_status: Optional[str], to_status: Optional[str]) -> bool:
    """True if an update moves a request out of the pending state

    Example:
        >>> leaves_pending("pending", "approved")
        True
        >>> leaves_pending("approved", "rejected")
        False
    """
    if to_status is None:
        return False
    return from_status == DocumentStatus.PENDING.value and to_status != DocumentStatus.PENDING.value
