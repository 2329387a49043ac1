"""
storefront_api.api.routers.auth

Customer account endpoints: register, login, current user.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_401_UNAUTHORIZED, HTTP_409_CONFLICT

from storefront_api.api.deps import settings_dep, user_repo
from storefront_api.auth.deps import get_principal
from storefront_api.auth.jwt import JwtConfig, issue_token
from storefront_api.auth.models import Principal
from storefront_api.auth.passwords import hash_password, verify_password
from storefront_api.db.models import User
from storefront_api.db.repositories.users import EmailTakenError, UserRepo
from storefront_api.settings import Settings

router = APIRouter(tags=["auth"])

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    email: str = Field(pattern=_EMAIL_PATTERN, max_length=254)
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(default="", max_length=120)


class LoginRequest(BaseModel):
    email: str = Field(max_length=254)
    password: str = Field(max_length=128)


class UserOut(BaseModel):
    id: str
    email: str
    name: str
    roles: list[str]


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


def _token_response(settings: Settings, user: User) -> TokenResponse:
    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=user.id,
        email=user.email,
        roles=user.roles,
    )
    return TokenResponse(
        access_token=token,
        user=UserOut(id=user.id, email=user.email, name=user.name, roles=user.roles),
    )


@router.post("/register", response_model=TokenResponse, status_code=HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    users: UserRepo = Depends(user_repo),
    settings: Settings = Depends(settings_dep),
) -> TokenResponse:
    try:
        user = await users.create(
            email=body.email,
            name=body.name,
            password_hash=hash_password(body.password),
        )
    except EmailTakenError as e:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Email already registered") from e
    return _token_response(settings, user)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    users: UserRepo = Depends(user_repo),
    settings: Settings = Depends(settings_dep),
) -> TokenResponse:
    user = await users.get_by_email(body.email)
    # Same answer for unknown email and wrong password.
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return _token_response(settings, user)


@router.get("/me", response_model=UserOut)
async def me(
    principal: Principal = Depends(get_principal),
    users: UserRepo = Depends(user_repo),
) -> UserOut:
    user = await users.get(principal.subject)
    if user is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return UserOut(id=user.id, email=user.email, name=user.name, roles=user.roles)
