from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from .image import Image
from .suggestion import EditSuggestion


class UIPhase(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    ANALYZING = "analyzing"
    EDITING = "editing"


class AnalysisKind(str, Enum):
    DESCRIBE = "describe"
    SUGGEST = "suggest"
    STORY = "story"


class SessionState(BaseModel):
    """Snapshot of one browser session.

    States are immutable; ``studio.services.reducer.reduce`` builds the next
    one from the previous state and an action.
    """

    model_config = ConfigDict(frozen=True)

    image: Image | None = None
    phase: UIPhase = UIPhase.IDLE
    active_analysis: AnalysisKind | None = None
    analysis_result: str | None = None
    edit_suggestions: tuple[EditSuggestion, ...] = ()
    error: str | None = None

    @model_validator(mode="after")
    def _single_analysis_output(self) -> "SessionState":
        if self.analysis_result is not None and self.edit_suggestions:
            raise ValueError("analysis_result and edit_suggestions are mutually exclusive")
        return self

    @property
    def is_busy(self) -> bool:
        return self.phase is not UIPhase.IDLE
