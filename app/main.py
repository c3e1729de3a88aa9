import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import create_schema, dispose_engine, init_engine
from app.exceptions import StorageError
from app.logging_config import setup_logging
from app.middleware import TimingMiddleware
from app.schemas import ErrorEnvelope
from app.routers import articles

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a ConfigurationError or connection failure here aborts the
    # process rather than serving requests without a database.
    setup_logging()
    init_engine(settings.database_url, **settings.engine_options)
    if settings.DB_SYNCHRONIZE:
        await create_schema()
    yield
    # Shutdown
    await dispose_engine()

app = FastAPI(
    title="Blog API",
    description="CRUD API for blog articles",
    version=VERSION,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error mapping
@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=ErrorEnvelope(success=False, detail="Storage error").model_dump(),
    )

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorEnvelope(success=False, detail=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )

# Routers
app.include_router(articles.router)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}
