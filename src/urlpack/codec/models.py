"""Option and result models for the codec facade."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .. import config
from .constants import DEFAULT_BINARY_MIME_TYPE, DEFAULT_TEXT_MIME_TYPE

InputType = Literal["string", "binary"]
"""How ``compress`` interprets its input."""

OutputType = Literal["string", "binary", "auto"]
"""How ``decompress`` represents its output."""


class CamelModel(BaseModel):
    """
    A strict, immutable model that also accepts camelCase field names.

    For example, ``max_size`` may be passed as ``maxSize``. This keeps option
    dictionaries written for the browser library usable unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )


class CompressOptions(CamelModel):
    """Options accepted by ``compress``."""

    max_size: int = Field(default_factory=lambda: config.URLPACK_MAX_SIZE, gt=0)
    """Reject payloads whose encoded length exceeds this many characters."""

    input_type: InputType = "string"
    """Declared shape of the input value."""

    mime_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("mime_type", "mimeType", "content_tag", "contentTag"),
    )
    """Content tag embedded in the frame. Defaults depend on ``input_type``."""

    normalize_whitespace: bool = False
    """Collapse whitespace runs in text input to single spaces and trim."""

    @field_validator("mime_type")
    @classmethod
    def _check_mime_type(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not value:
            raise ValueError("mime_type must not be empty")
        if ":" in value:
            raise ValueError(f"mime_type must not contain ':': {value!r}")
        return value

    @property
    def content_tag(self) -> str:
        """The content tag to frame with, defaults applied."""
        if self.mime_type is not None:
            return self.mime_type
        return DEFAULT_TEXT_MIME_TYPE if self.input_type == "string" else DEFAULT_BINARY_MIME_TYPE


class DecompressOptions(CamelModel):
    """Options accepted by ``decompress``."""

    output_type: OutputType = "auto"
    """Force text or bytes, or pick by content tag."""


class CompressResult(CamelModel):
    """Outcome of ``compress``."""

    payload: str
    """URL-safe encoded string."""

    size: int
    """Length of ``payload`` in characters."""


class DecompressResult(CamelModel):
    """Outcome of ``decompress``."""

    data: str | bytes
    """Recovered payload, as text or raw bytes."""

    mime_type: str
    """Content tag recovered from the frame."""
