from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.log import configure_logging

from .api.routes import router as api_router
from .api import routes as routes_module

from .domain.registry import DeviceRegistry
from .services.device_service import DeviceService
from .services.result_synthesizer import ResultSynthesizer


logger = logging.getLogger(__name__)


# --- Singletons (process lifetime, nothing persisted) ---
registry = DeviceRegistry()
synthesizer = ResultSynthesizer()
device_service = DeviceService(registry=registry, synthesizer=synthesizer)


def get_device_service() -> DeviceService:
    return device_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Starting %s", settings.app_name)
    try:
        yield
    finally:
        logger.info("Shutdown complete (%d devices discarded)", registry.count())


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def _allow_originless(request: Request, call_next):
    response = await call_next(request)
    if settings.cors_allow_originless and "origin" not in request.headers:
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
    return response


@app.exception_handler(RequestValidationError)
async def _invalid_request(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request data on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request data", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(HTTPException)
async def _http_error(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# Make the dependency function in routes resolve to the real one
app.dependency_overrides[routes_module.get_device_service] = get_device_service

app.include_router(api_router, prefix=settings.api_prefix)
