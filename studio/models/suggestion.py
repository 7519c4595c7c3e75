from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class EditSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="A short, catchy title for the edit suggestion.")
    description: str = Field(
        ...,
        min_length=1,
        description="A detailed description of the suggested edit, usable as an image-editing prompt.",
    )


# Parse-or-fail validator for a whole suggestions response
EditSuggestionList = TypeAdapter(list[EditSuggestion])
