"""Translation pipeline components.

This module provides the core pipeline components for translation:
- PromptBuilder: Builds the sectioned, numbered model prompt
- ModelInvoker: Makes the single multimodal model call
- ResponseExtractor / ResultMapper: Recover and reshape the model output
- TranslationPipeline: Orchestrates the complete flow
"""

from .prompt_engine import PromptBuilder, OUTPUT_SCHEMA
from .llm_gateway import (
    ModelClient,
    ModelClientConfig,
    LiteLLMClient,
    ModelInvoker,
    SAFETY_SETTINGS,
    create_model_client,
)
from .output_processor import ResponseExtractor, ResultMapper, OutputProcessor
from .pipeline import TranslationPipeline, PipelineFactory, PipelineOutcome

__all__ = [
    "PromptBuilder",
    "OUTPUT_SCHEMA",
    "ModelClient",
    "ModelClientConfig",
    "LiteLLMClient",
    "ModelInvoker",
    "SAFETY_SETTINGS",
    "create_model_client",
    "ResponseExtractor",
    "ResultMapper",
    "OutputProcessor",
    "TranslationPipeline",
    "PipelineFactory",
    "PipelineOutcome",
]
