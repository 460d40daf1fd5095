"""
Account endpoints for API v1.

Registration and login live at the top of the versioned API
(``/register``, ``/login``) to keep the paths existing clients call;
account listing and lookup are under ``/users``.  Only authentication
is implemented here: the list and lookup routes are not restricted to
particular roles.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from portfolio_api.app.core.db import DocumentStore, get_store
from portfolio_api.app.core.errors import internal_errors
from portfolio_api.app.schemas.response import ErrorResponse, envelope
from portfolio_api.app.schemas.user import UserCreate, UserLogin
from portfolio_api.app.services.user_service import UserService


router = APIRouter()


def get_user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return UserService(store)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register_user(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Register a new account.

    Returns HTTP 400 when the email is already registered.
    """
    with internal_errors("Error registering user"):
        await service.register(user)
    return envelope("User registered successfully")


@router.post("/login", responses={401: {"model": ErrorResponse}})
async def login_user(
    credentials: UserLogin,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Check email and password and return a signed token.

    Unknown email and wrong password both return HTTP 401 with the same
    message.
    """
    with internal_errors("Error logging in"):
        token, user = await service.login(credentials)
    return envelope("Login successful", token=token, user=user)


@router.get("/users")
async def list_users(service: UserService = Depends(get_user_service)) -> Dict[str, Any]:
    with internal_errors("Error fetching users"):
        users = await service.list_accounts()
    return envelope(data=users)


@router.get(
    "/users/{user_id}",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> Dict[str, Any]:
    """Retrieve a single account by ID."""
    with internal_errors("Error fetching user"):
        user = await service.get_account(user_id)
    return envelope(data=user)
