import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "DATABASE_ERROR", "message": "Internal server error"}},
    )


async def prepare_database(seed_permissions: bool) -> None:
    from sqlmodel import SQLModel

    import src.domain.entities  # noqa: F401  registers tables on the metadata
    from src.app.use_cases.permissions import SeedDefaultPermissionsUseCase
    from src.depends import engine, get_unit_of_work

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    if not seed_permissions:
        return

    async for uow in get_unit_of_work():
        result = await SeedDefaultPermissionsUseCase(uow).execute()
        if result.is_err():
            logger.error(f"Permission seeding failed: {result.error.code}")


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await prepare_database(ApplicationConfig.SEED_PERMISSIONS_ON_STARTUP)
        yield

    app = FastAPI(title="Enterprise Authorization API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        enterprise,
        enterprise_permission,
        health_check,
        permission,
        permission_assignment,
        role,
    )

    prefix = ApplicationConfig.API_PREFIX

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(enterprise.router, prefix=prefix)
    app.include_router(permission.router, prefix=prefix)
    app.include_router(enterprise_permission.router, prefix=prefix)
    app.include_router(permission_assignment.router, prefix=prefix)
    app.include_router(role.router, prefix=prefix)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)

    return app
