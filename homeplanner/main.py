"""
FastAPI application factory
"""
import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from homeplanner.config import get_settings
from homeplanner.errors import DomainError
from homeplanner.infrastructure.db.session import check_db_connection
from homeplanner.api.v1 import auth, profiles, finances, types, build, scenarios

logger = logging.getLogger(__name__)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Logs the traceback of any unhandled exception and answers 500"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return JSONResponse({"message": "Internal server error."}, status_code=500)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid payload."
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


def register_exception_handlers(app: FastAPI) -> None:
    """Every error answers with a uniform {"message": ...} body"""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse({"message": exc.message}, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"message": _validation_message(exc)}, status_code=400)


def create_app() -> FastAPI:
    """
    Application factory - builds and configures the FastAPI app

    Settings are read once here; a production environment without a database
    URL or signing secret fails at this point.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    if settings.uses_dev_secret:
        logger.warning("JWT_SECRET is missing. Falling back to development-only secret.")

    app = FastAPI(
        title="Home Planner API",
        version="1.0.0",
        description="Authentication, build catalog, family finances and mortgage scenarios.",
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        redoc_url=None,
    )

    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(build.router)
    app.include_router(profiles.router)
    app.include_router(finances.router)
    app.include_router(types.router)
    app.include_router(scenarios.router)

    # Health checks
    @app.get("/health", tags=["health"])
    def health():
        """Health check endpoint"""
        return {"ok": True}

    @app.get("/ready", tags=["health"])
    def ready():
        """Readiness check endpoint (database reachable)"""
        check_db_connection()
        return {"ok": True}

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "homeplanner.main:app",
        host="127.0.0.1",
        port=4010,
        reload=True,
    )
