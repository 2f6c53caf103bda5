from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from srbrowser.core.db import engine, init_db
from srbrowser.utils.exception_handlers import (
    general_exception_handler,
    http_exception_handler,
    middleware_api_error_handler,
    middleware_connection_error_handler,
    validation_exception_handler,
)
from srbrowser.utils.middleware_api import MiddlewareAPIError, MiddlewareConnectionError
from srbrowser.utils.router_discovery import register_routers


@asynccontextmanager
async def app_lifespan(_: FastAPI) -> AsyncGenerator[None, FastAPI]:
    await init_db()

    yield

    await engine.dispose()


app = FastAPI(
    title="Speedrun Browser API",
    lifespan=app_lifespan,
    servers=[{"url": "http://localhost:8080", "description": "Local server"}],
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


register_routers(app)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(MiddlewareConnectionError, middleware_connection_error_handler)
app.add_exception_handler(MiddlewareAPIError, middleware_api_error_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.get("/")
async def healthz() -> str:
    return "OK"
