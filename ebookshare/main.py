"""FastAPI application factory. No business logic; only wiring, middleware and error mapping."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ebookshare import __version__
from ebookshare.api import router as api_router
from ebookshare.core.config import Settings, get_settings
from ebookshare.core.database import build_engine, build_session_factory
from ebookshare.core.errors import AuthError, EbookShareError
from ebookshare.middleware import BodySizeLimitMiddleware

logger = logging.getLogger(__name__)


def _error_response(exc: EbookShareError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthError) and exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Every error response is JSON with a `message` field."""

    @app.exception_handler(EbookShareError)
    async def handle_service_error(request: Request, exc: EbookShareError) -> JSONResponse:
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request body.", "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_db_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception(
            "Database error",
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(status_code=500, content={"message": str(exc)})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around one immutable Settings instance, its engine and session factory."""
    settings = settings or get_settings()
    app = FastAPI(
        title="eBookShare API",
        version=__version__,
        description="Multi-user eBook sharing: signup/login, eBook CRUD and account management.",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_REQUEST_BYTES)

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Welcome to eBookShare backend"}

    return app
