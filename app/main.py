from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time
import os

from app import config
from app.db import init_db
from app.routers import health, teams, games, predictions, data
from app.utils.logging import setup_logging, request_logger

logger = setup_logging(level=config.LOG_LEVEL, json_format=config.LOG_JSON)

APP_NAME = "Hockey Predictor"
APP_VERSION = "1.0.0"
DISCLAIMER = "SIMULATION ONLY - Model prices are not market odds."
SLOW_REQUEST_SECONDS = 1.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{APP_NAME} {APP_VERSION} started; reports go to {config.REPORT_FOLDER}")
    yield


app = FastAPI(
    title=APP_NAME,
    description="""
# Hockey Predictor API

Rates NHL teams from season statistics and predicts the winner of each game,
with an American-odds price and notes. Every prediction run for a date also
writes a plain-text report to the configured report folder.

**SIMULATION ONLY** - Prices are model output, not market odds.
    """,
    version=APP_VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Service status"},
        {"name": "Teams", "description": "Team season statistics"},
        {"name": "Games", "description": "Scheduled games"},
        {"name": "Predictions", "description": "Game winner predictions and daily reports"},
        {"name": "Data", "description": "Sportradar data refresh"}
    ]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("ALLOWED_ORIGINS", "*").split(","),
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
    expose_headers=["X-Process-Time"],
)

for router_module in (health, teams, games, predictions, data):
    app.include_router(router_module.router)


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return forwarded or (request.client.host if request.client else "unknown")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - started

    if elapsed > SLOW_REQUEST_SECONDS:
        logger.warning(f"Slow request: {request.method} {request.url.path} took {elapsed:.2f}s")

    duration_ms = elapsed * 1000
    request_logger.log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=duration_ms,
        client_ip=_client_ip(request)
    )
    response.headers["X-Process-Time"] = str(round(duration_ms, 2))
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    request_logger.log_error(
        message=f"Unhandled exception: {type(exc).__name__}",
        exception=exc,
        path=request.url.path,
        client_ip=_client_ip(request)
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal error occurred", "type": type(exc).__name__}
    )


@app.get("/", tags=["Health"])
def root():
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "redoc": "/redoc",
        "report_folder": config.REPORT_FOLDER,
        "disclaimer": DISCLAIMER
    }
