from __future__ import annotations

import base64

from pydantic import BaseModel, ConfigDict, Field, computed_field

JPEG = "image/jpeg"
PNG = "image/png"


class Image(BaseModel):
    """The image currently shown in a session.

    Instances are never mutated; generation, upload and edit each produce a
    new one that replaces the previous image wholesale.
    """

    model_config = ConfigDict(frozen=True)

    encoded_payload: str = Field(..., min_length=1, exclude=True, repr=False)  # base64 text
    media_type: str = Field(..., pattern=r"^image/[\w.+-]+$")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_url(self) -> str:
        return f"data:{self.media_type};base64,{self.encoded_payload}"

    @classmethod
    def from_bytes(cls, data: bytes, media_type: str) -> "Image":
        return cls(encoded_payload=base64.b64encode(data).decode("ascii"), media_type=media_type)

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.encoded_payload)
