"""Translation result models.

ExtractedPayload mirrors the field names the model is asked to produce.
TranslationResult is the stable, renamed projection the API and PDF export
consume, so the model-facing names can change without touching consumers.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HeaderInfo(BaseModel):
    """Header metadata printed on the letter, when present."""

    model_config = ConfigDict(populate_by_name=True)

    child_name: Optional[str] = Field(default=None, alias="childName")
    child_id: Optional[str] = Field(default=None, alias="childID")
    written_by: Optional[str] = Field(default=None, alias="writtenBy")

    def is_empty(self) -> bool:
        return not (self.child_name or self.child_id or self.written_by)


class ExtractedPayload(BaseModel):
    """JSON object recovered from the model response.

    Every field is optional: absence is a valid outcome that consumers
    default, not a failure.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    header_info: Optional[HeaderInfo] = Field(default=None, alias="headerInfo")
    native_script: Optional[str] = Field(default=None, alias="nativeScript")
    natural_english: Optional[str] = Field(default=None, alias="naturalEnglish")
    cultural_insights: Optional[str] = Field(default=None, alias="culturalInsights")


class TranslationResult(BaseModel):
    """Canonical translation output.

    Text fields are None when the model omitted them and "" when it returned
    an empty string.
    """

    model_config = ConfigDict(populate_by_name=True)

    native_script: Optional[str] = Field(default=None, alias="nativeScript")
    translation: Optional[str] = Field(default=None)
    cultural_context: Optional[str] = Field(default=None, alias="culturalContext")
    header_info: HeaderInfo = Field(default_factory=HeaderInfo, alias="headerInfo")

    def with_translation(self, text: str) -> "TranslationResult":
        """Return an edited copy; the original result is left untouched."""
        return self.model_copy(update={"translation": text}, deep=True)

    def to_api_dict(self) -> dict:
        """Camel-case dict; omitted fields are left out, so an empty header is {}."""
        return self.model_dump(by_alias=True, exclude_none=True)
