from __future__ import annotations
import uuid
from contextlib import asynccontextmanager
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from walletapi.config import settings
from walletapi.errors import register_error_handlers
from walletapi.logging_setup import configure_logging
from walletapi.routes.system import router as system_router
from walletapi.routes.auth import router as auth_router
from walletapi.routes.users import router as users_router
from walletapi.routes.transactions import router as transactions_router
import structlog

configure_logging()
log = structlog.get_logger()

def _lifespan(service: str):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("startup", service=service, env=settings.environment, version=settings.app_version, git_sha=settings.git_sha)
        yield
        log.info("shutdown", service=service)
    return lifespan

async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    try:
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
    finally:
        structlog.contextvars.clear_contextvars()

def create_app(service: str, description: str, routers: list[APIRouter]) -> FastAPI:
    app = FastAPI(
        title=f"{service.capitalize()} API",
        version=settings.app_version,
        lifespan=_lifespan(service),
        description=description,
    )
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in routers:
        app.include_router(router)
    register_error_handlers(app)
    app.middleware("http")(add_request_id)
    return app

# uvicorn walletapi.main:user_app --port 3002
user_app = create_app(
    "users",
    "User management and bearer-token login",
    [system_router, auth_router, users_router],
)

# uvicorn walletapi.main:wallet_app --port 3001
wallet_app = create_app(
    "wallet",
    "CREDIT/DEBIT ledger and per-user balance",
    [system_router, transactions_router],
)
