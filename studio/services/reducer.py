"""Pure state transitions for a session."""
from __future__ import annotations

from typing import Callable

from studio.models import (
    Action,
    AnalysisCleared,
    AnalysisReady,
    AnalysisStarted,
    EditStarted,
    ErrorDismissed,
    GenerationStarted,
    ImageReady,
    OperationFailed,
    SessionReset,
    SessionState,
    SuggestionsReady,
    UIPhase,
)

_NO_ANALYSIS = {"active_analysis": None, "analysis_result": None, "edit_suggestions": ()}


def _generation_started(state: SessionState, action: GenerationStarted) -> dict:
    return {"phase": UIPhase.GENERATING, "error": None}


def _image_ready(state: SessionState, action: ImageReady) -> dict:
    return {"image": action.image, "phase": UIPhase.IDLE, **_NO_ANALYSIS}


def _analysis_started(state: SessionState, action: AnalysisStarted) -> dict:
    return {**_NO_ANALYSIS, "phase": UIPhase.ANALYZING, "active_analysis": action.kind, "error": None}


def _analysis_ready(state: SessionState, action: AnalysisReady) -> dict:
    return {"phase": UIPhase.IDLE, "analysis_result": action.text, "edit_suggestions": ()}


def _suggestions_ready(state: SessionState, action: SuggestionsReady) -> dict:
    return {"phase": UIPhase.IDLE, "analysis_result": None, "edit_suggestions": action.suggestions}


def _edit_started(state: SessionState, action: EditStarted) -> dict:
    return {**_NO_ANALYSIS, "phase": UIPhase.EDITING, "error": None}


def _operation_failed(state: SessionState, action: OperationFailed) -> dict:
    return {"phase": UIPhase.IDLE, "error": action.message}


def _error_dismissed(state: SessionState, action: ErrorDismissed) -> dict:
    return {"error": None}


def _analysis_cleared(state: SessionState, action: AnalysisCleared) -> dict:
    return dict(_NO_ANALYSIS)


_REDUCERS: dict[type[Action], Callable[[SessionState, Action], dict]] = {
    GenerationStarted: _generation_started,
    ImageReady: _image_ready,
    AnalysisStarted: _analysis_started,
    AnalysisReady: _analysis_ready,
    SuggestionsReady: _suggestions_ready,
    EditStarted: _edit_started,
    OperationFailed: _operation_failed,
    ErrorDismissed: _error_dismissed,
    AnalysisCleared: _analysis_cleared,
}


def reduce(state: SessionState, action: Action) -> SessionState:
    """Return the state that follows *state* once *action* is applied."""

    if isinstance(action, SessionReset):
        return SessionState()
    handler = _REDUCERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown action: {type(action).__name__}")
    # Validated, not copied: the next state must satisfy SessionState invariants
    return SessionState.model_validate({**_fields(state), **handler(state, action)})


def _fields(state: SessionState) -> dict:
    return {name: getattr(state, name) for name in SessionState.model_fields}
