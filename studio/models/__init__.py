from .actions import (
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
    SuggestionsReady,
)
from .image import JPEG, PNG, Image
from .session import AnalysisKind, SessionState, UIPhase
from .suggestion import EditSuggestion, EditSuggestionList

__all__ = [
    "Action",
    "AnalysisCleared",
    "AnalysisKind",
    "AnalysisReady",
    "AnalysisStarted",
    "EditStarted",
    "EditSuggestion",
    "EditSuggestionList",
    "ErrorDismissed",
    "GenerationStarted",
    "Image",
    "ImageReady",
    "JPEG",
    "OperationFailed",
    "PNG",
    "SessionReset",
    "SessionState",
    "SuggestionsReady",
    "UIPhase",
]
