"""Translation request models.

This module defines the input of the translation pipeline: the source language
selector and the immutable request built from a page set.
"""

import uuid
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...pages.models import PageImage, PageSet


class SourceLanguage(str, Enum):
    """Language selector values accepted at the submission boundary."""

    AUTO = "Auto-Detect"
    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"
    TELUGU = "Telugu"
    TAMIL = "Tamil"
    AMHARIC = "Amharic"
    AFAN_OROMO = "Afan Oromo"

    @property
    def is_auto(self) -> bool:
        return self is SourceLanguage.AUTO

    @classmethod
    def parse(cls, value: str) -> "SourceLanguage":
        """Parse a selector value, case-insensitively and by enum name."""
        if isinstance(value, cls):
            return value
        normalized = (value or "").strip().lower()
        if normalized in ("", "auto", "auto-detect", "autodetect"):
            return cls.AUTO
        for member in cls:
            if normalized in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unsupported source language: {value}")


class TranslationRequest(BaseModel):
    """One submission of a letter for translation.

    Immutable once constructed. Pages are deep-copied from the PageSet, so
    later edits to the set do not leak into an in-flight request.
    """

    model_config = ConfigDict(frozen=True)

    request_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    pages: Tuple[PageImage, ...] = Field(..., description="Pages in document order")
    source_language: SourceLanguage = Field(default=SourceLanguage.AUTO)

    @field_validator("pages")
    @classmethod
    def validate_pages(cls, value: Tuple[PageImage, ...]) -> Tuple[PageImage, ...]:
        if not value:
            raise ValueError("at least one page is required")
        return tuple(sorted(value, key=lambda p: p.order))

    @classmethod
    def from_page_set(
        cls,
        page_set: PageSet,
        source_language: SourceLanguage = SourceLanguage.AUTO,
    ) -> "TranslationRequest":
        return cls(
            pages=tuple(page.model_copy(deep=True) for page in page_set),
            source_language=source_language,
        )

    @property
    def page_count(self) -> int:
        return len(self.pages)
