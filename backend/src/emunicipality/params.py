"""Request parameter constraints shared by the routers and schemas."""

from typing import Annotated

from fastapi import Path

# Largest value a signed 64-bit INTEGER column holds
MAX_ENTITY_ID = 2**63 - 1

EntityIdPath = Annotated[int, Path(ge=1, le=MAX_ENTITY_ID, description="Positive integer id")]
