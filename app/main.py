import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.routes_api import router as api_router
from app.core.config import get_settings
from app.core.errors import UnsupportedTypeError, UpstreamError
from app.services.metadata import get_metadata_service

load_dotenv()

settings = get_settings()
logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Application lifespan context manager."""
    try:
        yield
    finally:
        # Only close the service if a request ever created it
        if get_metadata_service.cache_info().currsize:
            try:
                await get_metadata_service().aclose()
            except Exception as e:
                logger.error(f"Error closing HTTP session: {e}")


app = FastAPI(
    title="mediameta",
    description="Normalized movie and series metadata from TMDB and JustWatch",
    version="0.1.0",
    lifespan=app_lifespan,
)


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error("Upstream failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc), "upstream_status": exc.status_code},
    )


@app.exception_handler(UnsupportedTypeError)
async def unsupported_type_handler(request: Request, exc: UnsupportedTypeError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app.include_router(api_router, prefix="/api")
