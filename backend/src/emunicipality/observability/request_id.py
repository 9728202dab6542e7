"""Request correlation ids.

The id of the request being served lives in a ContextVar, so log records and
error responses produced anywhere during that request can carry it. Clients
may supply their own id in X-Request-ID; otherwise one is generated.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

REQUEST_ID_HEADER = "X-Request-ID"

# Outside of a request (startup, migrations, tests calling services directly)
# no id is set.
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    return uuid.uuid4().hex


def get_request_id() -> str:
    """Id of the current request, or "no-request-id" outside of one."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    """Bind ``request_id`` to the current context (the request being handled)."""
    request_id_var.set(request_id)
