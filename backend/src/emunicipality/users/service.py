"""User handlers.

Username and email are unique (exact, case-sensitive match). The password is
an opaque credential: it is stored verbatim in password_hash and never read
back out through these handlers.
"""

from typing import Any, Dict, List, Mapping

from ..datastore import Datastore
from ..errors import NotFoundError
from ..observability.logging_config import get_logger
from ..utils import utcnow
from ..validators import (
    ensure_not_referenced,
    ensure_unique,
    ensure_user_exists,
    ensure_valid_email,
    ensure_valid_role,
    require_fields,
)
from .schemas import UserResponse

logger = get_logger(__name__)

USER_COLUMNS = "user_id, username, email, role, created_at"

REQUIRED_ON_CREATE = ("username", "email", "password", "role")

# Request field -> column
UPDATABLE_FIELDS = {
    "username": "username",
    "email": "email",
    "password": "password_hash",
    "role": "role",
}


def _fetch_user(store: Datastore, user_id: Any) -> UserResponse:
    result = store.execute(f"SELECT {USER_COLUMNS} FROM users WHERE user_id = ?", [user_id])
    row = result.first()
    if row is None:
        raise NotFoundError("user")
    return UserResponse.model_validate(row)


def list_users(store: Datastore) -> List[UserResponse]:
    result = store.execute(f"SELECT {USER_COLUMNS} FROM users ORDER BY created_at DESC, user_id DESC")
    return [UserResponse.model_validate(row) for row in result.rows]


def get_user(store: Datastore, user_id: int) -> UserResponse:
    return _fetch_user(store, user_id)


def create_user(store: Datastore, data: Mapping[str, Any]) -> UserResponse:
    """Create a user.

    Raises:
        ValidationError: missing field, malformed email or unknown role
        ConflictError: username or email already taken
    """
    require_fields(REQUIRED_ON_CREATE, data)
    ensure_valid_email(data["email"])
    ensure_valid_role(data["role"])

    with store.transaction():
        ensure_unique(store, "users", "username", data["username"])
        ensure_unique(store, "users", "email", data["email"])

        result = store.execute(
            "INSERT INTO users (username, email, password_hash, role, created_at) "
            "VALUES (?, ?, ?, ?, ?) RETURNING user_id",
            [data["username"], data["email"], data["password"], data["role"], utcnow()],
        )
        user_id = result.rows[0]["user_id"]
        user = _fetch_user(store, user_id)

    logger.info("User created", extra={"entity": "user", "entity_id": user_id})
    return user


def update_user(store: Datastore, user_id: int, changes: Mapping[str, Any]) -> UserResponse:
    """Merge-patch a user.

    Uniqueness is re-checked only for values that actually change.

    Raises:
        NotFoundError: user does not exist
        ValidationError: empty field, malformed email or unknown role
        ConflictError: new username or email already taken
    """
    patch: Dict[str, Any] = {
        key: changes[key]
        for key in UPDATABLE_FIELDS
        if key in changes and changes[key] is not None
    }
    require_fields(list(patch), patch)
    if "email" in patch:
        ensure_valid_email(patch["email"])
    if "role" in patch:
        ensure_valid_role(patch["role"])

    with store.transaction():
        current = ensure_user_exists(store, user_id)

        for field in ("username", "email"):
            if field in patch and patch[field] != current[field]:
                ensure_unique(store, "users", field, patch[field], exclude_id=user_id)

        if patch:
            assignments = ", ".join(f"{UPDATABLE_FIELDS[key]} = ?" for key in patch)
            store.execute(
                f"UPDATE users SET {assignments} WHERE user_id = ?",
                [*patch.values(), user_id],
            )

        user = _fetch_user(store, user_id)

    logger.info(
        f"User updated: {', '.join(key for key in patch if key != 'password') or 'no changes'}",
        extra={"entity": "user", "entity_id": user_id},
    )
    return user


def delete_user(store: Datastore, user_id: int) -> None:
    """Raises NotFoundError if absent, ReferentialBlockError while documents reference it."""
    with store.transaction():
        ensure_user_exists(store, user_id)
        ensure_not_referenced(store, "user_id", user_id, "user")
        store.execute("DELETE FROM users WHERE user_id = ?", [user_id])

    logger.info("User deleted", extra={"entity": "user", "entity_id": user_id})
