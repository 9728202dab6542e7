"""User management endpoints.

Email and username uniqueness is enforced on create and update. A user that
still owns document requests cannot be deleted.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..datastore import Datastore, get_datastore
from ..params import EntityIdPath
from ..responses import Envelope, ListEnvelope, created_response, success_response
from . import service
from .schemas import UserCreate, UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=ListEnvelope[UserResponse],
    summary="List users",
    description="Returns all users, newest first."
)
def list_users(store: Datastore = Depends(get_datastore)) -> JSONResponse:
    return success_response(service.list_users(store))


@router.get(
    "/{user_id}",
    response_model=Envelope[UserResponse],
    summary="Get user by ID",
    responses={404: {"description": "User not found"}},
)
def get_user(user_id: EntityIdPath, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    return success_response(service.get_user(store, user_id))


@router.post(
    "",
    response_model=Envelope[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    responses={
        400: {"description": "Missing field, invalid email or role"},
        409: {"description": "Username or email already exists"},
    },
)
def create_user(data: UserCreate, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    user = service.create_user(store, data.model_dump(exclude_unset=True))
    return created_response(user, "User created successfully")


@router.put(
    "/{user_id}",
    response_model=Envelope[UserResponse],
    summary="Update user",
    responses={
        404: {"description": "User not found"},
        409: {"description": "Username or email already exists"},
    },
)
def update_user(
    user_id: EntityIdPath,
    data: UserUpdate,
    store: Datastore = Depends(get_datastore),
) -> JSONResponse:
    user = service.update_user(store, user_id, data.model_dump(exclude_unset=True))
    return success_response(user, message="User updated successfully")


@router.delete(
    "/{user_id}",
    response_model=Envelope[None],
    summary="Delete user",
    responses={
        400: {"description": "User still has document requests"},
        404: {"description": "User not found"},
    },
)
def delete_user(user_id: EntityIdPath, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    service.delete_user(store, user_id)
    return success_response(message="User deleted successfully")
