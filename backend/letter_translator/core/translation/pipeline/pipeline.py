"""Main translation pipeline orchestrator.

This module provides the TranslationPipeline class that coordinates all
pipeline components for one letter:

PageSet -> ImagePreprocessor -> PromptBuilder + ModelInvoker -> raw text
        -> ResponseExtractor -> ResultMapper -> TranslationResult
"""

import logging
from typing import Optional, Set, Union

from pydantic import BaseModel, Field

from ...errors import InputError, TranslatorError
from ...pages.models import PageSet
from ...pages.preprocessor import ImagePreprocessor
from ..models.context import SourceLanguage, TranslationRequest
from ..models.result import TranslationResult
from .llm_gateway import ModelClient, ModelInvoker, create_model_client
from .output_processor import OutputProcessor
from .prompt_engine import PromptBuilder

logger = logging.getLogger(__name__)


class PipelineOutcome(BaseModel):
    """Tagged success/failure result of one pipeline run."""

    success: bool
    result: Optional[TranslationResult] = None
    error_type: Optional[str] = None
    message: Optional[str] = None
    raw: Optional[str] = Field(default=None, description="Diagnostic text, e.g. the model response")

    @classmethod
    def ok(cls, result: TranslationResult) -> "PipelineOutcome":
        return cls(success=True, result=result)

    @classmethod
    def from_error(cls, error: TranslatorError) -> "PipelineOutcome":
        return cls(
            success=False,
            error_type=error.error_type,
            message=error.message,
            raw=error.raw,
        )


class TranslationPipeline:
    """Runs a translation request end to end.

    Each request results in exactly one model call. Submitting the same
    request again while its call is still running is rejected.
    """

    def __init__(
        self,
        client: ModelClient,
        max_pages: int = 5,
        preprocessor: Optional[ImagePreprocessor] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        output_processor: Optional[OutputProcessor] = None,
    ):
        self.max_pages = max_pages
        self.invoker = ModelInvoker(client)
        self.preprocessor = preprocessor or ImagePreprocessor()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.output_processor = output_processor or OutputProcessor()
        self._in_flight: Set[str] = set()

    def validate(self, request: TranslationRequest) -> None:
        """Reject requests that must never reach the network.

        Raises:
            InputError: If there are no pages or more than max_pages
        """
        if request.page_count < 1:
            raise InputError("No pages were provided.")
        if request.page_count > self.max_pages:
            raise InputError(
                f"Too many pages: {request.page_count} submitted, at most {self.max_pages} allowed."
            )

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Execute the full translation pipeline.

        Flow:
        1. Validate the request
        2. Preprocess pages concurrently (rotation, re-encode)
        3. Build the prompt for page count and language
        4. Invoke the model once
        5. Extract and map the response

        Raises:
            TranslatorError: Any pipeline failure, unchanged
        """
        self.validate(request)
        if request.request_id in self._in_flight:
            raise InputError("This request is already being translated.")

        self._in_flight.add(request.request_id)
        try:
            logger.info(
                f"Translating request {request.request_id}: pages={request.page_count}, "
                f"language={request.source_language.value}"
            )
            encoded_pages = await self.preprocessor.process_all(request.pages)
            prompt = self.prompt_builder.build(request.page_count, request.source_language)
            response = await self.invoker.invoke(prompt, encoded_pages)
            result = self.output_processor.process(response)
        finally:
            self._in_flight.discard(request.request_id)

        logger.info(f"Request {request.request_id} translated")
        return result

    async def translate_pages(
        self,
        page_set: PageSet,
        source_language: Union[SourceLanguage, str] = SourceLanguage.AUTO,
    ) -> TranslationResult:
        """Build a request from a page set and translate it."""
        return await self.translate(self.build_request(page_set, source_language))

    async def run(self, request: TranslationRequest) -> PipelineOutcome:
        """Like translate(), but returns a tagged outcome instead of raising."""
        try:
            return PipelineOutcome.ok(await self.translate(request))
        except TranslatorError as e:
            logger.warning(f"Request {request.request_id} failed: {e.error_type}: {e.message}")
            return PipelineOutcome.from_error(e)

    def build_request(
        self,
        page_set: PageSet,
        source_language: Union[SourceLanguage, str] = SourceLanguage.AUTO,
    ) -> TranslationRequest:
        """Snapshot a page set into an immutable request.

        Raises:
            InputError: If the set is empty or the language is unsupported
        """
        if len(page_set) == 0:
            raise InputError("No pages were provided.")
        try:
            language = SourceLanguage.parse(source_language)
        except ValueError as e:
            raise InputError(str(e)) from e
        return TranslationRequest.from_page_set(page_set, language)


class PipelineFactory:
    """Factory for creating translation pipelines."""

    @staticmethod
    def create(settings, client: Optional[ModelClient] = None) -> TranslationPipeline:
        """Create a configured pipeline.

        Raises:
            ConfigurationError: If no client is given and the API key is missing
        """
        return TranslationPipeline(
            client=client or create_model_client(settings),
            max_pages=settings.max_pages,
        )
