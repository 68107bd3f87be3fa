import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.database import Database

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error envelope — every error body is {"error": "<message>"}
# ---------------------------------------------------------------------------


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.debug("Invalid input on %s %s: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid input", "details": details},
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    database: Database = app.state.database

    # Startup: local/dev databases can skip Alembic
    if settings.CREATE_TABLES_ON_STARTUP:
        database.create_all()
    yield

    # Shutdown: release pooled connections
    database.dispose()
    logger.info("Database engine disposed.")


def create_app(database: Database | None = None) -> FastAPI:
    """Build the FastAPI application around a storage client.

    Args:
        database: Storage client to serve requests from.  Defaults to one
                  built from ``settings.DATABASE_URL``.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.database = database or Database(settings.DATABASE_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "app": settings.APP_NAME}

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    from app.routers import auth, expenses, incomes, managers, months

    prefix = settings.API_PREFIX

    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Auth"])

    # Shared ledgers, their months (creation) and statistics
    app.include_router(managers.router, prefix=f"{prefix}/managers", tags=["Managers"])

    # Month detail, update and close
    app.include_router(months.router, prefix=f"{prefix}/months", tags=["Months"])

    # Ledger entries
    app.include_router(incomes.router, prefix=f"{prefix}/incomes", tags=["Incomes"])
    app.include_router(expenses.router, prefix=f"{prefix}/expenses", tags=["Expenses"])

    return app


app = create_app()
