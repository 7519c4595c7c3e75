from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse

from studio.config import get_settings
from studio.handlers import studio_handler
from studio.services.controller import StudioError
from studio.services.session_store import get_session_store

# Fails at import when API_KEY is missing; the app refuses to start without it.
settings = get_settings()
logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_session_store()
    logger.info("Vision Studio ready (provider=%s)", settings.genai_provider)
    yield


app = FastAPI(title="Vision Studio", lifespan=lifespan)

app.include_router(studio_handler.router)


@app.exception_handler(StudioError)
async def refuse(request: Request, exc: StudioError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.get("/", include_in_schema=False)
async def index():
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
