from typing import cast

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from srbrowser.schemas.common import APIResponse
from srbrowser.utils.middleware_api import MiddlewareAPIError, MiddlewareConnectionError


def http_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(HTTPException, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=APIResponse(status="error", message=exc.detail).model_dump(),
    )


def validation_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(RequestValidationError, exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=APIResponse(
            status="error",
            message="Validation error",
            data=[
                {"loc": err["loc"], "msg": err["msg"], "type": err["type"]} for err in exc.errors()
            ],
        ).model_dump(),
    )


def middleware_connection_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(MiddlewareConnectionError, exc)
    logger.warning(f"Speedrun middleware unreachable: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=APIResponse(
            status="error", message="Could not connect to the speedrun service"
        ).model_dump(),
    )


def middleware_api_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(MiddlewareAPIError, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=APIResponse(status="error", message=exc.msg).model_dump(),
    )


def general_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=APIResponse(status="error", message=str(exc)).model_dump(),
    )
