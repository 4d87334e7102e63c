# users_api/app/api/endpoints/users.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from users_api.app.api import deps
from users_api.app.core.errors import store_error_to_http
from users_api.app.repositories.base import UserRepository
from users_api.app.schemas.user import (
    DeleteUserRequest,
    MessageResponse,
    UpdateLoginRequest,
    UpdatePasswordRequest,
    UpdateUserRequest,
    UpdateUserResponse,
    UserDetailResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

DELETE_MODE_DEACTIVATE = 0
DELETE_MODE_VANISH = 1


def _not_found(login: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {login} was not found")


# 1. LIST ACTIVE USERS (admin)
@router.get("/users", response_model=List[UserDetailResponse])
async def read_active_users(
        repository: UserRepository = Depends(deps.get_user_repository),
        _: deps.AuthContext = Depends(deps.require_admin),
):
    return await repository.get_active_users()


# 2. LIST USERS OLDER THAN AGE (admin)
@router.get("/users/above/{age}", response_model=List[UserResponse])
async def read_users_above_age(
        age: int = Path(ge=0, le=200),
        repository: UserRepository = Depends(deps.get_user_repository),
        _: deps.AuthContext = Depends(deps.require_admin),
):
    return await repository.get_users_above_age(age)


# 3. UPDATE PROFILE (self or admin)
@router.put("/users/{login}", response_model=UpdateUserResponse)
async def update_user(
        login: str,
        user_in: UpdateUserRequest,
        repository: UserRepository = Depends(deps.get_user_repository),
        auth: deps.AuthContext = Depends(deps.get_auth_context),
):
    auth.ensure_can_act_on(login)
    result = await repository.update_user(login, user_in, modified_by=auth.login)
    if not result.ok:
        raise store_error_to_http(result.error, login)
    return result.value


# 4. CHANGE PASSWORD (self or admin)
@router.post("/users/{login}/changepassword", response_model=MessageResponse)
async def change_password(
        login: str,
        request: UpdatePasswordRequest,
        repository: UserRepository = Depends(deps.get_user_repository),
        auth: deps.AuthContext = Depends(deps.get_auth_context),
):
    auth.ensure_can_act_on(login)
    result = await repository.change_password(login, request.new_password, modified_by=auth.login)
    if not result.ok:
        raise store_error_to_http(result.error, login)

    logger.info("Password of %s changed by %s", login, auth.login)
    return {"message": "Password was successfully changed"}


# 5. CHANGE LOGIN (self or admin)
@router.put("/users/{login}/changelogin", response_model=MessageResponse)
async def change_login(
        login: str,
        request: UpdateLoginRequest,
        repository: UserRepository = Depends(deps.get_user_repository),
        auth: deps.AuthContext = Depends(deps.get_auth_context),
):
    auth.ensure_can_act_on(login)
    result = await repository.change_login(login, request.new_login, modified_by=auth.login)
    if not result.ok:
        raise store_error_to_http(result.error, login)

    logger.info("Login %s renamed to %s by %s", login, request.new_login, auth.login)
    return {"message": "Login was successfully changed"}


# 6. DELETE: 0 = deactivate, 1 = remove permanently (admin)
@router.delete("/users/{login}", response_model=MessageResponse)
async def delete_user(
        login: str,
        request: DeleteUserRequest,
        repository: UserRepository = Depends(deps.get_user_repository),
        auth: deps.AuthContext = Depends(deps.require_admin),
):
    if request.delete_mode == DELETE_MODE_DEACTIVATE:
        if not await repository.deactivate_user(login, revoked_by=auth.login):
            raise _not_found(login)
        logger.info("User %s deactivated by %s", login, auth.login)
        return {"message": "User was deactivated"}

    if request.delete_mode == DELETE_MODE_VANISH:
        if not await repository.delete_user(login):
            raise _not_found(login)
        logger.info("User %s permanently deleted by %s", login, auth.login)
        return {"message": "User was permanently deleted"}

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unexisting delete mode")


# 7. RESTORE (admin)
@router.put("/users/{login}/restore", response_model=MessageResponse)
async def restore_user(
        login: str,
        repository: UserRepository = Depends(deps.get_user_repository),
        auth: deps.AuthContext = Depends(deps.require_admin),
):
    if await repository.restore_user(login) is None:
        raise _not_found(login)

    logger.info("User %s restored by %s", login, auth.login)
    return {"message": "User was successfully restored"}
