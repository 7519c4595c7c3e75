"""Messages that drive session state transitions."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .image import Image
from .session import AnalysisKind
from .suggestion import EditSuggestion


class Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class GenerationStarted(Action):
    pass


class ImageReady(Action):
    image: Image


class AnalysisStarted(Action):
    kind: AnalysisKind


class AnalysisReady(Action):
    text: str = Field(..., min_length=1)


class SuggestionsReady(Action):
    suggestions: tuple[EditSuggestion, ...]


class EditStarted(Action):
    pass


class OperationFailed(Action):
    message: str = Field(..., min_length=1)


class ErrorDismissed(Action):
    pass


class AnalysisCleared(Action):
    pass


class SessionReset(Action):
    pass
