"""Error taxonomy for the letter translation pipeline.

Every failure the pipeline can produce is one of these types. Each carries a
user-facing ``message`` and, where one exists, the ``raw`` diagnostic text
(usually the model response) so a human can inspect what actually came back.
"""

from typing import Optional


class TranslatorError(Exception):
    """Base class for all pipeline errors."""

    error_type = "translator_error"

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.raw = raw

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error_type": self.error_type,
            "message": self.message,
            "raw": self.raw,
        }


class ConfigurationError(TranslatorError):
    """A required setting (the model API key) is missing. Never retried."""

    error_type = "configuration_error"


class InputError(TranslatorError):
    """The submitted pages or parameters are unusable."""

    error_type = "input_error"


class ProcessingError(TranslatorError):
    """An image could not be decoded or re-encoded."""

    error_type = "processing_error"


class InvocationError(TranslatorError):
    """The model call failed (network, auth, service). Retryable by the caller."""

    error_type = "invocation_error"


class ExtractionError(TranslatorError):
    """No JSON object could be recovered from the model response."""

    error_type = "extraction_error"

    def __init__(self, message: str, raw: str):
        super().__init__(message, raw=raw)


class MappingError(TranslatorError):
    """The extracted payload does not have the shape of a translation result."""

    error_type = "mapping_error"


class ExportError(TranslatorError):
    """The PDF could not be assembled. No partial document is produced."""

    error_type = "export_error"
