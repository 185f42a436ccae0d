"""Letter translation module.

Usage:
    from letter_translator.core.translation import PipelineFactory

    pipeline = PipelineFactory.create(settings)
    result = await pipeline.translate_pages(page_set, "Amharic")
"""

from .models import (
    SourceLanguage,
    TranslationRequest,
    PromptSection,
    PromptBundle,
    RawModelResponse,
    HeaderInfo,
    ExtractedPayload,
    TranslationResult,
)
from .languages import LanguageProfile, LANGUAGE_PROFILES, get_language_profile
from .pipeline import (
    PromptBuilder,
    ModelClient,
    ModelClientConfig,
    LiteLLMClient,
    ModelInvoker,
    ResponseExtractor,
    ResultMapper,
    OutputProcessor,
    TranslationPipeline,
    PipelineFactory,
    PipelineOutcome,
)

__all__ = [
    "SourceLanguage",
    "TranslationRequest",
    "PromptSection",
    "PromptBundle",
    "RawModelResponse",
    "HeaderInfo",
    "ExtractedPayload",
    "TranslationResult",
    "LanguageProfile",
    "LANGUAGE_PROFILES",
    "get_language_profile",
    "PromptBuilder",
    "ModelClient",
    "ModelClientConfig",
    "LiteLLMClient",
    "ModelInvoker",
    "ResponseExtractor",
    "ResultMapper",
    "OutputProcessor",
    "TranslationPipeline",
    "PipelineFactory",
    "PipelineOutcome",
]
