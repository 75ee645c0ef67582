"""
FastAPI application.

The identity layer in front of this service verifies the caller and
forwards the user id in the X-User-Id header.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from http import HTTPStatus
from typing import Annotated, Any

import fastapi
import structlog
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from kungfu import Error, Ok, Result
from starlette.exceptions import HTTPException as StarletteHTTPException

from digigoods._config import Settings
from digigoods._errors import CheckoutError, UnauthorizedAccessError
from digigoods._types import Clock, UserId
from digigoods.api._schemas import CheckoutIn, ErrorOut, OrderOut, ProfileIn, ProfileOut
from digigoods.checkout import CheckoutOrchestrator
from digigoods.db import create_database
from digigoods.pricing import PricingPolicy
from digigoods.profiles import ProfileService
from digigoods.uow import UnitOfWorkFactory, sqlalchemy_uow_factory

logger = structlog.get_logger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Services
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Services:
    checkout: CheckoutOrchestrator
    profiles: ProfileService

    @classmethod
    def build(
        cls,
        uow_factory: UnitOfWorkFactory,
        settings: Settings,
        clock: Clock | None = None,
    ) -> Services:
        return cls(
            checkout=CheckoutOrchestrator(
                uow_factory,
                policy=PricingPolicy.from_settings(settings),
                clock=clock,
            ),
            profiles=ProfileService(uow_factory, clock=clock),
        )


def get_services(request: fastapi.Request) -> Services:
    services: Services | None = getattr(request.app.state, "services", None)
    if services is None:
        raise fastapi.HTTPException(status_code=503, detail="Service not ready")
    return services


def authenticated_user(
    x_user_id: Annotated[int | None, fastapi.Header()] = None,
) -> UserId:
    if x_user_id is None:
        raise fastapi.HTTPException(status_code=401, detail="Missing authenticated user")
    return UserId(x_user_id)


ServicesDep = Annotated[Services, fastapi.Depends(get_services)]
AuthDep = Annotated[UserId, fastapi.Depends(authenticated_user)]


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


def error_response(error: CheckoutError, path: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=error.status,
        content=ErrorOut.from_domain(error, path).model_dump(mode="json"),
    )


def respond[T](
    result: Result[T, CheckoutError],
    to_out: Callable[[T], Any],
    path: str | None = None,
) -> JSONResponse:
    match result:
        case Ok(value):
            return JSONResponse(content=to_out(value).model_dump(mode="json", by_alias=True))
        case Error(e):
            return error_response(e, path)


async def http_error_handler(request: fastapi.Request, exc: StarletteHTTPException) -> JSONResponse:
    body = ErrorOut(
        status=exc.status_code,
        error=HTTPStatus(exc.status_code).name,
        message=str(exc.detail),
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"), headers=exc.headers)


async def validation_error_handler(request: fastapi.Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies answer 400 in the same shape as domain errors."""
    body = ErrorOut.from_validation(exc.errors(), request.url.path)
    return JSONResponse(status_code=body.status, content=body.model_dump(mode="json"))


# ═══════════════════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════════════════

router = fastapi.APIRouter()


@router.post("/checkout")
async def checkout(
    request: fastapi.Request,
    body: CheckoutIn,
    services: ServicesDep,
    user_id: AuthDep,
) -> JSONResponse:
    result = await services.checkout.process_checkout(body.to_domain(), user_id)
    return respond(result, OrderOut.from_domain, request.url.path)


@router.get("/users/{user_id}/profile")
async def get_profile(
    request: fastapi.Request,
    user_id: int,
    services: ServicesDep,
    caller: AuthDep,
) -> JSONResponse:
    path = request.url.path
    if caller != UserId(user_id):
        return error_response(UnauthorizedAccessError(UserId(user_id), caller), path)
    return respond(await services.profiles.get_profile(caller), ProfileOut.from_domain, path)


@router.put("/users/{user_id}/profile")
async def update_profile(
    request: fastapi.Request,
    user_id: int,
    body: ProfileIn,
    services: ServicesDep,
    caller: AuthDep,
) -> JSONResponse:
    path = request.url.path
    if caller != UserId(user_id):
        return error_response(UnauthorizedAccessError(UserId(user_id), caller), path)
    result = await services.profiles.update_profile(caller, body.to_domain())
    return respond(result, ProfileOut.from_domain, path)


# ═══════════════════════════════════════════════════════════════════════════════
# Application
# ═══════════════════════════════════════════════════════════════════════════════


def install(app: fastapi.FastAPI) -> fastapi.FastAPI:
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(router)
    return app


def create_app(
    uow_factory: UnitOfWorkFactory,
    *,
    settings: Settings | None = None,
    clock: Clock | None = None,
) -> fastapi.FastAPI:
    """Application over an existing unit-of-work factory."""
    app = fastapi.FastAPI(title="digigoods")
    app.state.services = Services.build(uow_factory, settings or Settings(), clock)
    return install(app)


def create_app_from_settings(settings: Settings | None = None) -> fastapi.FastAPI:
    """Application that opens the configured database on startup."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: fastapi.FastAPI) -> AsyncIterator[None]:
        session_factory, engine = await create_database(settings.database_url, echo=settings.db_echo)
        app.state.services = Services.build(sqlalchemy_uow_factory(session_factory), settings)
        logger.info("app_started", database=engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("app_stopped")

    return install(fastapi.FastAPI(title="digigoods", lifespan=lifespan))


__all__ = (
    "Services",
    "create_app",
    "create_app_from_settings",
    "router",
    "error_response",
)
