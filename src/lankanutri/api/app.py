"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lankanutri.api import (
    auth,
    chatbot,
    diet,
    foods,
    meal_logs,
    nutrition,
    orders,
    plates,
    products,
    programs,
    tips,
    uploads,
)
from lankanutri.app_logging import configure_logging
from lankanutri.containers import AppContainer
from lankanutri.errors import AppError, ValidationError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    debug = container.settings.debug

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="LankaNutri API", lifespan=lifespan)
    app.state.container = container

    for module in (foods, plates, programs, tips, meal_logs, diet, chatbot):
        app.include_router(module.router)
    for module in (products, orders, auth):
        app.include_router(module.router)
        app.include_router(module.admin_router)
    app.include_router(uploads.router)
    app.include_router(nutrition.router)

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        body: dict[str, object] = {"message": exc.message}
        if isinstance(exc, ValidationError) and exc.field:
            body["errors"] = [{"field": exc.field, "message": exc.message}]
        if exc.detail and debug:
            body["detail"] = exc.detail
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                "%s %s failed: %s", request.method, request.url.path, exc.message
            )
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"][1:])
                or str(error["loc"][0]),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation failed", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body: dict[str, object] = {"message": "Server error"}
        if debug:
            body["detail"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
