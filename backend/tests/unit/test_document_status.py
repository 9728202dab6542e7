"""Unit tests for DocumentStatus values

Status has no transition graph: every legal value may follow any other.
"""

import pytest

from emunicipality.domain.documents import (
    DocumentStatus,
    VALID_STATUSES,
    is_valid_status,
    leaves_pending,
)

pytestmark = pytest.mark.unit


class TestDocumentStatus:
    """Test DocumentStatus enum and helpers"""

    def test_document_status_enum_values(self):
        assert DocumentStatus.PENDING.value == "pending"
        assert DocumentStatus.APPROVED.value == "approved"
        assert DocumentStatus.REJECTED.value == "rejected"
        assert DocumentStatus.IN_PROGRESS.value == "in_progress"
        assert VALID_STATUSES == ("pending", "approved", "rejected", "in_progress")

    @pytest.mark.parametrize("value", ["pending", "approved", "rejected", "in_progress"])
    def test_valid_values(self, value):
        assert is_valid_status(value) is True

    @pytest.mark.parametrize("value", ["archived", "PENDING", "", None, 1])
    def test_invalid_values(self, value):
        assert is_valid_status(value) is False

    def test_leaving_pending(self):
        assert leaves_pending("pending", "approved") is True
        assert leaves_pending("pending", "in_progress") is True

    def test_not_leaving_pending(self):
        """Staying pending, starting elsewhere, or no status change"""
        assert leaves_pending("pending", "pending") is False
        assert leaves_pending("approved", "rejected") is False
        assert leaves_pending("pending", None) is False
