"""Output processing for model responses.

This module turns the untrusted response text into a TranslationResult:
- ResponseExtractor: recovers one JSON object from the text
- ResultMapper: validates the object and renames it to the canonical result
- OutputProcessor: runs both in order

Invalid JSON is rejected, never repaired.
"""

import json
import logging
import re
from typing import Any, Dict, Mapping, Optional

from letter_translator.utils.text import preview_text

from ...errors import ExtractionError, MappingError
from ..models.response import RawModelResponse
from ..models.result import ExtractedPayload, HeaderInfo, TranslationResult

logger = logging.getLogger(__name__)

# Opening (```json, ```JSON) and closing (```) fence markers
FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


def _reject_constant(name: str):
    """NaN, Infinity and -Infinity are not JSON."""
    raise ValueError(f"Non-standard JSON constant {name}")


class ResponseExtractor:
    """Recovers a single JSON object from raw model output.

    Steps, each applied once and in order:
    1. Remove every code-fence marker anywhere in the text
    2. Trim surrounding whitespace
    3. Slice from the first ``{`` to the last ``}`` inclusive
    4. Strictly parse the slice
    """

    def strip_fences(self, text: str) -> str:
        return FENCE_PATTERN.sub("", text)

    def slice_object(self, text: str) -> Optional[str]:
        """Outermost ``{...}`` span, or None if there is no such pair."""
        start = text.find("{")
        end = text.rfind("}")
        if start < 0 or end < start:
            return None
        return text[start : end + 1]

    def extract(self, raw_text: str) -> Dict[str, Any]:
        """Recover the JSON object.

        Args:
            raw_text: Untrusted model response

        Returns:
            Parsed JSON object

        Raises:
            ExtractionError: If no brace pair exists or the slice is not valid
                JSON. The original raw text is attached to the error.
        """
        raw_text = raw_text or ""
        cleaned = self.strip_fences(raw_text).strip()

        candidate = self.slice_object(cleaned)
        if candidate is None:
            logger.warning(f"No JSON object in model response: {preview_text(raw_text)}")
            raise ExtractionError(
                "The model response did not contain a JSON object.",
                raw=raw_text,
            )

        try:
            return json.loads(candidate, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            logger.warning(
                f"Invalid JSON in model response ({e.msg} at line {e.lineno} column {e.colno}): "
                f"{preview_text(raw_text)}"
            )
            raise ExtractionError(
                f"Failed to parse the model response as JSON: {e.msg} "
                f"(line {e.lineno}, column {e.colno}).",
                raw=raw_text,
            ) from e
        except (ValueError, RecursionError) as e:
            logger.warning(f"Unparseable JSON in model response ({e}): {preview_text(raw_text)}")
            raise ExtractionError(
                f"Failed to parse the model response as JSON: {e}",
                raw=raw_text,
            ) from e


class ResultMapper:
    """Maps an extracted payload onto the canonical TranslationResult.

    Field renames:
        nativeScript     -> nativeScript
        naturalEnglish   -> translation
        culturalInsights -> culturalContext
        headerInfo       -> headerInfo (empty when missing)

    Fields of the wrong type are dropped with a warning rather than failing
    the whole result. Absent text fields stay None.
    """

    TEXT_FIELDS = ("nativeScript", "naturalEnglish", "culturalInsights")
    HEADER_FIELDS = ("childName", "childID", "writtenBy")

    def map(self, payload: Mapping[str, Any]) -> TranslationResult:
        """Build a TranslationResult from an extracted payload.

        Raises:
            MappingError: If the payload is not a JSON object
        """
        if not isinstance(payload, Mapping):
            raise MappingError(
                f"Expected a JSON object, got {type(payload).__name__}."
            )

        extracted = ExtractedPayload.model_validate(self._clean(payload))

        return TranslationResult(
            native_script=extracted.native_script,
            translation=extracted.natural_english,
            cultural_context=extracted.cultural_insights,
            header_info=extracted.header_info or HeaderInfo(),
        )

    def _clean(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        cleaned: Dict[str, Any] = {}
        for key in self.TEXT_FIELDS:
            if key in payload:
                cleaned[key] = self._text_field(key, payload[key])

        header = payload.get("headerInfo")
        if header is None:
            cleaned["headerInfo"] = {}
        elif isinstance(header, Mapping):
            cleaned["headerInfo"] = {
                key: self._header_field(key, header[key])
                for key in self.HEADER_FIELDS
                if key in header
            }
        else:
            logger.warning(f"Ignoring headerInfo of type {type(header).__name__}")
            cleaned["headerInfo"] = {}
        return cleaned

    def _text_field(self, key: str, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        logger.warning(f"Ignoring {key} of type {type(value).__name__}")
        return None

    def _header_field(self, key: str, value: Any) -> Optional[str]:
        # IDs are often written as bare numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if value is None or isinstance(value, str):
            return value or None
        logger.warning(f"Ignoring headerInfo.{key} of type {type(value).__name__}")
        return None


class OutputProcessor:
    """Processes a raw model response into a TranslationResult."""

    def __init__(
        self,
        extractor: Optional[ResponseExtractor] = None,
        mapper: Optional[ResultMapper] = None,
    ):
        self.extractor = extractor or ResponseExtractor()
        self.mapper = mapper or ResultMapper()

    def process(self, response: RawModelResponse) -> TranslationResult:
        logger.debug(f"Raw model response: {preview_text(response.content, 2000)}")
        payload = self.extractor.extract(response.content)
        return self.mapper.map(payload)
