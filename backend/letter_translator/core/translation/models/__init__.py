"""Translation pipeline data models.

This module provides structured data models for the translation pipeline,
ensuring clear contracts between components.
"""

from .context import SourceLanguage, TranslationRequest
from .prompt import PromptSection, PromptBundle
from .response import TokenUsage, RawModelResponse
from .result import HeaderInfo, ExtractedPayload, TranslationResult

__all__ = [
    # Request models
    "SourceLanguage",
    "TranslationRequest",
    # Prompt models
    "PromptSection",
    "PromptBundle",
    # Response models
    "TokenUsage",
    "RawModelResponse",
    # Result models
    "HeaderInfo",
    "ExtractedPayload",
    "TranslationResult",
]
