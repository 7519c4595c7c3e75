"""JSON API used by the studio page.

Every endpoint acts on the caller's session (cookie ``settings.session_cookie``)
and returns the resulting ``SessionState``. Refusals raised by the controller
(busy session, no image) are turned into HTTP 409 by the application.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile
from pydantic import BaseModel

from studio.config import get_settings
from studio.models import SessionState
from studio.services.controller import SessionController
from studio.services.session_store import SessionStore, get_session_store

router = APIRouter(prefix="/api")
settings = get_settings()
logger = logging.getLogger(__name__)


class GenerateRequest(BaseModel):
    prompt: str


class EditRequest(BaseModel):
    instruction: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def current_session(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
) -> SessionController:
    session_id, controller = store.get_or_create(request.cookies.get(settings.session_cookie))
    response.set_cookie(settings.session_cookie, session_id, httponly=True, samesite="lax")
    return controller


def _view(state: SessionState) -> dict:
    return state.model_dump(mode="json")


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

@router.get("/state")
async def get_state(session: SessionController = Depends(current_session)):
    return _view(session.state)


@router.post("/error/dismiss")
async def dismiss_error(session: SessionController = Depends(current_session)):
    return _view(session.dismiss_error())


@router.post("/analysis/clear")
async def clear_analysis(session: SessionController = Depends(current_session)):
    return _view(session.clear_analysis())


@router.post("/reset")
async def reset(session: SessionController = Depends(current_session)):
    return _view(session.reset())


# ---------------------------------------------------------------------------
# Image sources
# ---------------------------------------------------------------------------

@router.post("/generate")
async def generate(body: GenerateRequest, session: SessionController = Depends(current_session)):
    return _view(await session.generate(body.prompt))


@router.post("/upload")
async def upload(file: UploadFile = File(...), session: SessionController = Depends(current_session)):
    data = await file.read()
    logger.debug("Upload %s (%s, %d bytes)", file.filename, file.content_type, len(data))
    return _view(session.upload(data))


# ---------------------------------------------------------------------------
# Analyses and edits
# ---------------------------------------------------------------------------

@router.post("/describe")
async def describe(session: SessionController = Depends(current_session)):
    return _view(await session.describe())


@router.post("/suggest")
async def suggest(session: SessionController = Depends(current_session)):
    return _view(await session.suggest_edits())


@router.post("/story")
async def story(session: SessionController = Depends(current_session)):
    return _view(await session.tell_story())


@router.post("/edit")
async def edit(body: EditRequest, session: SessionController = Depends(current_session)):
    return _view(await session.apply_edit(body.instruction))
