"""Per-session controller: phase gate plus orchestration outcomes as actions."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable

from studio.models import (
    Action,
    AnalysisCleared,
    AnalysisKind,
    AnalysisReady,
    AnalysisStarted,
    EditStarted,
    ErrorDismissed,
    GenerationStarted,
    Image,
    ImageReady,
    OperationFailed,
    SessionReset,
    SessionState,
    SuggestionsReady,
)
from studio.services.orchestrator import EMPTY_INSTRUCTION, EMPTY_PROMPT, OperationError, Orchestrator
from studio.services.reducer import reduce
from studio.services.uploads import UploadError, UploadIntake

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "An unknown error occurred."


class StudioError(Exception):
    """Base class for requests a session refuses without changing state."""


class SessionBusyError(StudioError):
    def __init__(self) -> None:
        super().__init__("Another operation is still in progress.")


class NoImageError(StudioError):
    def __init__(self) -> None:
        super().__init__("Generate or upload an image first.")


class SessionController:
    """Owns one session's state.

    Only one operation may be in flight: every user-triggered entry point
    checks the phase and moves it out of idle before its first ``await``, so
    a second request arriving meanwhile is refused with ``SessionBusyError``.
    """

    def __init__(self, orchestrator: Orchestrator, intake: UploadIntake) -> None:
        self._orchestrator = orchestrator
        self._intake = intake
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, action: Action) -> SessionState:
        self._state = reduce(self._state, action)
        logger.debug("%s -> phase=%s", type(action).__name__, self._state.phase.value)
        return self._state

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    async def generate(self, prompt: str) -> SessionState:
        self._ensure_idle()
        if not prompt.strip():
            return self.dispatch(OperationFailed(message=EMPTY_PROMPT))

        async def call() -> Action:
            return ImageReady(image=await self._orchestrator.generate_image(prompt))

        return await self._run(GenerationStarted(), call)

    async def describe(self) -> SessionState:
        return await self._analyze(AnalysisKind.DESCRIBE, self._orchestrator.describe_image)

    async def tell_story(self) -> SessionState:
        return await self._analyze(AnalysisKind.STORY, self._orchestrator.write_story)

    async def suggest_edits(self) -> SessionState:
        self._ensure_idle()
        image = self._require_image()

        async def call() -> Action:
            suggestions = await self._orchestrator.suggest_edits(image)
            return SuggestionsReady(suggestions=tuple(suggestions))

        return await self._run(AnalysisStarted(kind=AnalysisKind.SUGGEST), call)

    async def apply_edit(self, instruction: str) -> SessionState:
        self._ensure_idle()
        image = self._require_image()
        # A blank instruction must not clear the analysis the user is editing from
        if not instruction.strip():
            return self.dispatch(OperationFailed(message=EMPTY_INSTRUCTION))

        async def call() -> Action:
            return ImageReady(image=await self._orchestrator.apply_edit(image, instruction))

        return await self._run(EditStarted(), call)

    # ------------------------------------------------------------------
    # Local operations
    # ------------------------------------------------------------------

    def upload(self, data: bytes) -> SessionState:
        self._ensure_idle()
        try:
            image = self._intake.read(data)
        except UploadError as exc:
            logger.warning("Rejected upload: %s", exc.reason)
            return self.dispatch(OperationFailed(message=exc.message))
        return self.dispatch(ImageReady(image=image))

    def dismiss_error(self) -> SessionState:
        return self.dispatch(ErrorDismissed())

    def clear_analysis(self) -> SessionState:
        self._ensure_idle()
        return self.dispatch(AnalysisCleared())

    def reset(self) -> SessionState:
        self._ensure_idle()
        return self.dispatch(SessionReset())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _analyze(self, kind: AnalysisKind, operation: Callable[[Image], Awaitable[str]]) -> SessionState:
        self._ensure_idle()
        image = self._require_image()

        async def call() -> Action:
            return AnalysisReady(text=await operation(image))

        return await self._run(AnalysisStarted(kind=kind), call)

    async def _run(self, started: Action, call: Callable[[], Awaitable[Action]]) -> SessionState:
        self.dispatch(started)
        try:
            outcome = await call()
        except OperationError as exc:
            return self.dispatch(OperationFailed(message=exc.message))
        except BaseException:
            # Includes cancellation: the phase never stays busy without a call in flight
            self.dispatch(OperationFailed(message=UNKNOWN_ERROR))
            raise
        return self.dispatch(outcome)

    def _ensure_idle(self) -> None:
        if self._state.is_busy:
            raise SessionBusyError()

    def _require_image(self) -> Image:
        if self._state.image is None:
            raise NoImageError()
        return self._state.image
