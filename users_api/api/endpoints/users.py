"""User endpoints."""

from fastapi import APIRouter

from users_api.core.exceptions import (
    AddingUserError,
    DeletingUserError,
    UpdatingUserError,
    UserNotFoundError,
)
from users_api.core.workers import run_blocking
from users_api.dependencies import PathUserId, UserServiceDep
from users_api.schemas.response import UserListResponse
from users_api.schemas.users import UserCreate, UserUpdate

router = APIRouter(tags=["Users"])


@router.get("/get", response_model=UserListResponse)
async def get_users(user_service: UserServiceDep) -> UserListResponse:
    """List every user."""
    users_list = await run_blocking(user_service.list_users, failure=UserNotFoundError)
    return UserListResponse(message="Users Fetched successfully", data=users_list)


@router.post("/add", response_model=UserListResponse)
async def add_user(user_data: UserCreate, user_service: UserServiceDep) -> UserListResponse:
    """Create a user; the server assigns its external id and timestamp."""
    users_list = await run_blocking(
        user_service.create_user, user_data, failure=AddingUserError
    )
    return UserListResponse(message="Users added successfully", data=users_list)


@router.get("/get/{id}", response_model=UserListResponse)
async def get_user(user_id: PathUserId, user_service: UserServiceDep) -> UserListResponse:
    """
    Fetch users by external id.

    An unknown id is not an error: the list is simply empty.
    """
    users_list = await run_blocking(
        user_service.get_users_by_user_id, user_id, failure=UserNotFoundError
    )
    return UserListResponse(message="User fetched successfully", data=users_list)


@router.post("/update/{id}", response_model=UserListResponse)
async def update_user(
    user_id: PathUserId,
    user_data: UserUpdate,
    user_service: UserServiceDep,
) -> UserListResponse:
    """Update the fields present in the body and return the updated user."""
    users_list = await run_blocking(
        user_service.update_user, user_id, user_data, failure=UpdatingUserError
    )
    return UserListResponse(message="Users updated successfully", data=users_list)


@router.get("/delete/{id}", response_model=UserListResponse)
async def delete_user(user_id: PathUserId, user_service: UserServiceDep) -> UserListResponse:
    """Delete a user and return the removed record."""
    users_list = await run_blocking(
        user_service.delete_user, user_id, failure=DeletingUserError
    )
    return UserListResponse(message="Users Deleted successfully", data=users_list)
