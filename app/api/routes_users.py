# File: app/api/routes_users.py

"""
Users API.

Input is validated before the store is touched; store outcomes are mapped
one by one to responses.
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_store
from app.core.errors import ConflictError, NotFoundError, StoreError
from app.schemas.user import UserCreate, parse_user_id
from app.services.results import Conflict, NotFound, Ok
from app.services.user_store import UserStore

router = APIRouter()


@router.get("", summary="List users, newest first")
def list_users(store: UserStore = Depends(get_store)):
    result = store.list_users()
    if isinstance(result, Ok):
        return {"users": result.value, "count": len(result.value)}
    raise StoreError(result.message, error="Failed to fetch users")


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a user")
def create_user(payload: UserCreate, store: UserStore = Depends(get_store)):
    result = store.create_user(name=payload.name, email=payload.email)
    if isinstance(result, Ok):
        return {"message": "User created successfully", "user": result.value}
    if isinstance(result, Conflict):
        raise ConflictError(result.message)
    raise StoreError(result.message, error="Failed to create user")


@router.get("/{user_id}", summary="Get a user by id")
def get_user(user_id: str, store: UserStore = Depends(get_store)):
    result = store.get_user(parse_user_id(user_id))
    if isinstance(result, Ok):
        return {"user": result.value}
    if isinstance(result, NotFound):
        raise NotFoundError(result.message)
    raise StoreError(result.message, error="Failed to fetch user")
