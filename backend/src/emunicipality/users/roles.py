"""User roles for eMunicipality.

- CITIZEN: submits document requests
- EMPLOYEE: municipal clerk handling requests
- ADMIN: manages users and the document type catalog

Roles are stored as TEXT and must match exactly. Access control is not
enforced by the API; the role is descriptive only.
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles in eMunicipality."""
    CITIZEN = "citizen"
    ADMIN = "admin"
    EMPLOYEE = "employee"


VALID_ROLES = tuple(role.value for role in UserRole)
