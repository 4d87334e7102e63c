# users_api/app/core/errors.py
"""
Error translation at the HTTP boundary.

Store outcomes map to status codes here; an account being deactivated is
reported as 404 rather than 403 so account state is not revealed.
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from users_api.app.repositories.base import StoreError

logger = logging.getLogger(__name__)

STORE_ERROR_STATUS = {
    StoreError.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    StoreError.LOGIN_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    StoreError.ACCOUNT_DEACTIVATED: status.HTTP_404_NOT_FOUND,
}


def store_error_to_http(error: StoreError, login: str) -> HTTPException:
    if error is StoreError.LOGIN_ALREADY_EXISTS:
        detail = "User with this login already exists"
    else:
        detail = f"User {login} was not found"
    return HTTPException(status_code=STORE_ERROR_STATUS[error], detail=detail)


def unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def forbidden(detail: str = "You don't have access") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed input is a plain 400 here, not FastAPI's default 422.
    # Only field locations are logged; inputs may hold passwords.
    logger.info("Rejected request to %s: %s", request.url.path, [e["loc"] for e in exc.errors()])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
