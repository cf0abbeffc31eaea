import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.errors import TripPlannerError, ValidationError

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_LOG_DIR.mkdir(exist_ok=True)

_log_level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "powderplan.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from app.routers import flights, lodging, recommendations, resorts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield

    # Shutdown: release pooled upstream connections
    from app.services.amadeus_client import amadeus_client
    from app.services.cache_service import cache_service
    from app.services.open_meteo_client import open_meteo_client

    await amadeus_client.close()
    await open_meteo_client.close()
    await cache_service.close()
    logger.info("Upstream clients closed")


app = FastAPI(
    title="PowderPlan",
    description="Group ski trip recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TripPlannerError)
async def trip_planner_error_handler(request: Request, exc: TripPlannerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {len(exc.errors())} validation errors")
    return await trip_planner_error_handler(request, ValidationError("Invalid request data"))


app.include_router(resorts.router, prefix="/api/resorts", tags=["resorts"])
app.include_router(lodging.router, prefix="/api/lodging", tags=["lodging"])
app.include_router(flights.router, prefix="/api/flights", tags=["flights"])
app.include_router(recommendations.router, prefix="/api/recommendations", tags=["recommendations"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "powderplan"}
