from contextlib import asynccontextmanager
from typing import Optional
import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, configure_logging
from exceptions import APIError
from routes import api_router, ApplicationDependencies, PRODUCTS_PATH, diagnostic_payload
from routes.health import API_VERSION

# Browser front ends call the API directly from another origin
CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


def critical_error_response(exc: Exception, settings: Settings) -> JSONResponse:
    content = {
        "error": "Critical server error",
        "message": str(exc),
    }
    if not settings.is_production:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=content)


def _is_ping(request: Request) -> bool:
    return bool(request.query_params.get("ping")) and request.url.path.rstrip("/") == PRODUCTS_PATH


def create_app(
    settings: Optional[Settings] = None,
    app_dependencies: Optional[ApplicationDependencies] = None
) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)
    deps = app_dependencies or ApplicationDependencies.from_settings(settings)

    for name, error in deps.errors.items():
        logger.warning("{} store unavailable: {}", name, error.error)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create the products table once per process instead of on every request
        if deps.database is not None:
            try:
                deps.database.ensure_schema()
            except APIError as e:
                logger.warning("Schema bootstrap deferred to first request: {}", e.error)
        yield
        if deps.database is not None:
            deps.database.dispose()

    app = FastAPI(title="Products API", version=API_VERSION, lifespan=lifespan)
    app.state.app_dependencies = deps

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        if exc.status_code >= 500:
            logger.error("{} {} failed: {}", request.method, request.url.path, exc.error)
        else:
            logger.info("{} {} rejected: {}", request.method, request.url.path, exc.error)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.error})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("{} {} rejected: invalid request body", request.method, request.url.path)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.middleware("http")
    async def cors_and_errors(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        elif _is_ping(request):
            response = JSONResponse(status_code=200, content=diagnostic_payload(settings))
        else:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.exception("CRITICAL API ERROR: {} {}", request.method, request.url.path)
                response = critical_error_response(exc, settings)

        response.headers.update(CORS_HEADERS)
        return response

    # Include all routes
    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
