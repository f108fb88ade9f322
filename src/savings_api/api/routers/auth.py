"""
savings_api.api.routers.auth

Public account endpoints: register, login, and token introspection for the caller.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from savings_api.api.deps import account_service_dep
from savings_api.api.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserOut,
    VerifyResponse,
)
from savings_api.auth.deps import get_principal
from savings_api.auth.models import Principal
from savings_api.db.models import UserRole
from savings_api.services.accounts import AccountService

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    accounts: AccountService = Depends(account_service_dep),
) -> RegisterResponse:
    user = await accounts.register(
        username=body.username, password=body.password, role=UserRole(body.role)
    )
    return RegisterResponse(
        message="User registered successfully", user=UserOut.model_validate(user)
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    accounts: AccountService = Depends(account_service_dep),
) -> LoginResponse:
    token = await accounts.login(username=body.username, password=body.password)
    return LoginResponse(message="Login successful", token=token)


@router.get("/verify", response_model=VerifyResponse)
async def verify(principal: Principal = Depends(get_principal)) -> VerifyResponse:
    return VerifyResponse(message="Token is valid", user=principal.as_dict())


@router.get("/profile", response_model=UserOut)
async def profile(
    principal: Principal = Depends(get_principal),
    accounts: AccountService = Depends(account_service_dep),
) -> UserOut:
    return UserOut.model_validate(await accounts.profile(principal))
