import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.compliance.router import router as compliance_router
from src.config import get_app_settings, get_client_base_url
from src.db.database import close_db
from src.db.phone_numbers.router import router as phone_numbers_router
from src.exceptions import ServiceError
from src.forwarding.router import router as forwarding_router
from src.porting.router import router as porting_router
from src.utils.logger import logger


def get_version():
    """Get version from pyproject.toml"""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    return data["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting API", environment=get_app_settings().environment.value)
    yield
    await close_db()


app = FastAPI(
    title="Number Compliance API",
    description="10DLC registration, number porting and call forwarding",
    version=get_version(),
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_client_base_url()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render domain and provider errors as ``{"message", "errorCode"}``."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            path=request.url.path,
            error_code=exc.error_code,
            error=exc.message,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "errorCode": exc.error_code},
    )


app.include_router(compliance_router, prefix="/api")
app.include_router(porting_router, prefix="/api")
app.include_router(forwarding_router, prefix="/api")
app.include_router(phone_numbers_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "Number Compliance API is running"}


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "Number Compliance API is running"}
