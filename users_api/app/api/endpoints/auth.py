# users_api/app/api/endpoints/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from users_api.app.api import deps
from users_api.app.core.config import Settings, get_settings
from users_api.app.core.errors import store_error_to_http
from users_api.app.repositories.base import UserRepository
from users_api.app.schemas.user import LoginRequest, RegisterRequest, RegisterResponse, UserResponse
from users_api.app.security import jwt
from users_api.app.services.login import LoginOutcome, LoginService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
        user_in: RegisterRequest,
        repository: UserRepository = Depends(deps.get_user_repository),
        auth: deps.AuthContext = Depends(deps.require_admin),
):
    result = await repository.create_user(user_in, created_by=auth.login)
    if not result.ok:
        raise store_error_to_http(result.error, user_in.login)

    logger.info("User %s registered by %s", user_in.login, auth.login)
    return result.value


@router.post("/login", response_model=UserResponse)
async def login(
        credentials: LoginRequest,
        response: Response,
        login_service: LoginService = Depends(deps.get_login_service),
        settings: Settings = Depends(get_settings),
):
    result = await login_service.try_login(credentials.login, credentials.password)

    if result.outcome is LoginOutcome.UNKNOWN_LOGIN:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wrong username")
    if result.outcome is LoginOutcome.ACCOUNT_DEACTIVATED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {credentials.login} was not found")
    if result.outcome is LoginOutcome.WRONG_PASSWORD:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wrong password")

    token = jwt.create_access_token(result.claims, settings)
    response.headers["Authorization"] = f"Bearer {token}"
    return result.user
