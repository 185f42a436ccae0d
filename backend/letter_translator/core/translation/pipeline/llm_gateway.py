"""Model gateway for the vision-language call.

This module provides:
- ModelClientConfig: connection and generation parameters for one client
- ModelClient / LiteLLMClient: an explicitly constructed client value,
  injected into the invoker (there is no process-wide client)
- ModelInvoker: packages prompt text and page images into exactly one
  multimodal request and returns the raw response text
"""

import base64
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from litellm import acompletion

from ...errors import ConfigurationError, InputError, InvocationError, TranslatorError
from ...pages.models import EncodedPage
from ..models.prompt import PromptBundle
from ..models.response import RawModelResponse, TokenUsage

logger = logging.getLogger(__name__)


# Handwritten personal letters (family news, illness, festivals) trip these
# filters as false positives. Fixed for every request.
SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
SAFETY_SETTINGS: List[Dict[str, str]] = [
    {"category": category, "threshold": "BLOCK_NONE"} for category in SAFETY_CATEGORIES
]


@dataclass
class ModelClientConfig:
    """Complete configuration for one model client."""

    provider: str
    model: str
    api_key: Optional[str]
    base_url: Optional[str] = None
    temperature: float = 0.2
    max_tokens: int = 8192

    def get_litellm_model(self) -> str:
        """Get model string in LiteLLM format (provider/model)."""
        if self.provider == "openai" or self.model.startswith(f"{self.provider}/"):
            return self.model
        return f"{self.provider}/{self.model}"

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        """Convert to kwargs for litellm.acompletion()."""
        kwargs: Dict[str, Any] = {
            "model": self.get_litellm_model(),
            "api_key": self.api_key,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if self.base_url:
            kwargs["api_base"] = self.base_url
        return kwargs

    @classmethod
    def from_settings(cls, settings) -> "ModelClientConfig":
        return cls(
            provider=settings.llm_provider,
            model=settings.llm_model,
            api_key=settings.gemini_api_key,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )


class ModelClient(ABC):
    """Abstract client for a multimodal chat-completion endpoint."""

    @property
    @abstractmethod
    def provider(self) -> str:
        """Get provider name."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Get model identifier."""

    @abstractmethod
    async def complete(self, messages: List[Dict[str, Any]], **kwargs: Any) -> RawModelResponse:
        """Make one completion call and return the raw response.

        Raises:
            InvocationError: If the call fails for any reason
        """


class LiteLLMClient(ModelClient):
    """Model client backed by LiteLLM."""

    def __init__(self, config: ModelClientConfig):
        """Initialize the client.

        Raises:
            ConfigurationError: If no API key is configured. Checked here so a
                missing credential is reported before any network attempt.
        """
        if not config.api_key:
            raise ConfigurationError(
                "Model API key is missing. Set GEMINI_API_KEY in the environment."
            )
        self._config = config
        logger.info(
            f"[Model Client] Initialized: provider={config.provider}, "
            f"model={config.model}, litellm_model={config.get_litellm_model()}"
        )

    @property
    def provider(self) -> str:
        return self._config.provider

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(self, messages: List[Dict[str, Any]], **kwargs: Any) -> RawModelResponse:
        start_time = time.time()

        call_kwargs = self._config.to_litellm_kwargs()
        call_kwargs.update({k: v for k, v in kwargs.items() if v is not None})
        call_kwargs["messages"] = messages

        logger.info(f"[Model Client] Calling LiteLLM: model={call_kwargs['model']}")

        try:
            response = await acompletion(**call_kwargs)
        except Exception as e:
            logger.error(f"[Model Client] Call failed: model={self.model}, error={e}")
            raise InvocationError(f"Model call failed: {e}") from e

        latency_ms = int((time.time() - start_time) * 1000)
        usage = getattr(response, "usage", None)
        content = response.choices[0].message.content or ""

        logger.info(f"[Model Client] Response received: latency={latency_ms}ms, chars={len(content)}")

        return RawModelResponse(
            content=content,
            provider=self.provider,
            model=self.model,
            usage=TokenUsage(
                prompt_tokens=usage.prompt_tokens if usage else 0,
                completion_tokens=usage.completion_tokens if usage else 0,
                total_tokens=usage.total_tokens if usage else 0,
            ),
            latency_ms=latency_ms,
        )


def create_model_client(settings) -> ModelClient:
    """Construct the default client from application settings.

    Raises:
        ConfigurationError: If the API key is missing
    """
    return LiteLLMClient(ModelClientConfig.from_settings(settings))


def encode_page_part(page: EncodedPage) -> Dict[str, Any]:
    """Inline image segment carrying the page bytes and MIME type."""
    data = base64.b64encode(page.data).decode("ascii")
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{page.mime_type};base64,{data}"},
    }


class ModelInvoker:
    """Sends one prompt plus ordered page images to the model.

    Performs exactly one call per invocation. Retries and timeouts belong to
    the caller and the transport respectively.
    """

    def __init__(self, client: ModelClient):
        self.client = client

    def build_messages(self, prompt_text: str, pages: Sequence[EncodedPage]) -> List[Dict[str, Any]]:
        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt_text}]
        content.extend(encode_page_part(page) for page in pages)
        return [{"role": "user", "content": content}]

    async def invoke(
        self,
        prompt: Union[PromptBundle, str],
        pages: Sequence[EncodedPage],
    ) -> RawModelResponse:
        """Invoke the model once.

        Args:
            prompt: Prompt bundle or plain prompt text
            pages: Encoded pages in document order

        Returns:
            RawModelResponse with the untrusted response text

        Raises:
            InputError: If no pages are given
            InvocationError: If the call fails
        """
        if not pages:
            raise InputError("At least one page image is required")

        if isinstance(prompt, PromptBundle):
            prompt_text = prompt.text
            overrides = {"temperature": prompt.temperature, "max_tokens": prompt.max_tokens}
        else:
            prompt_text = prompt
            overrides = {}

        messages = self.build_messages(prompt_text, pages)
        logger.info(
            f"Invoking model: provider={self.client.provider}, model={self.client.model}, "
            f"pages={len(pages)}"
        )

        try:
            return await self.client.complete(
                messages,
                safety_settings=SAFETY_SETTINGS,
                **overrides,
            )
        except TranslatorError:
            raise
        except Exception as e:
            raise InvocationError(f"Model call failed: {e}") from e
