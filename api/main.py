import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse


# Load environment variables from .env file
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"
load_dotenv(ENV_FILE)

from api.config import chain_settings, settings
from api.enums import ERROR_STATUS
from api.routers.api_v1.api import api_router
from api.utils.security import generate_api_key
from mint_contracts.errors import MintContractError


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Logs the configuration the API starts with.
    """
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Network: {chain_settings.network} (chain id {chain_settings.chain_id})")
    logger.info("API Documentation: http://127.0.0.1:8000/docs")

    yield  # Application runs here

    logger.info("Shutting down API")


app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    contact=settings.contact,
    lifespan=lifespan,
)


@app.exception_handler(MintContractError)
async def mint_contract_error_handler(request: Request, exc: MintContractError) -> JSONResponse:
    """Map engine errors to HTTP responses by error category"""
    status_code = ERROR_STATUS[exc.category]
    logger.debug(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__, "category": exc.category.value},
    )


@app.get("/")
async def root():
    """Basic HTML response."""
    body = (
        "<html>"
        "<body style='padding: 10px;'>"
        "<h1>Welcome to the Modular Mint API</h1>"
        "<div>"
        "Check the docs: <a href='/docs'>here</a>"
        "</div>"
        "</body>"
        "</html>"
    )

    return HTMLResponse(content=body)


@app.get("/generate-api-key")
async def get_new_api_key():
    api_key = generate_api_key()

    return {"api_key": api_key}


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        - status: "healthy"
        - api_version: API version
        - environment: Current environment
        - chain: Network and chain id the API mints on
    """
    return {
        "status": "healthy",
        "api_version": settings.api_version,
        "environment": settings.environment,
        "chain": {"network": chain_settings.network, "chain_id": chain_settings.chain_id},
    }


app.include_router(api_router, prefix=settings.API_V1_STR)
