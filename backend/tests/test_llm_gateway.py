"""Tests for the model gateway."""

import asyncio
import base64
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from letter_translator.config import Settings
from letter_translator.core.errors import ConfigurationError, InputError, InvocationError
from letter_translator.core.pages import EncodedPage
from letter_translator.core.translation import (
    LiteLLMClient,
    ModelClientConfig,
    ModelInvoker,
    PromptBuilder,
)
from letter_translator.core.translation.pipeline import SAFETY_SETTINGS, create_model_client

from conftest import FakeModelClient

ACOMPLETION = "letter_translator.core.translation.pipeline.llm_gateway.acompletion"


def litellm_response(content: str):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.usage.prompt_tokens = 100
    response.usage.completion_tokens = 20
    response.usage.total_tokens = 120
    return response


def config(api_key="test-key") -> ModelClientConfig:
    return ModelClientConfig(provider="gemini", model="gemini-2.5-flash", api_key=api_key)


class TestModelClientConfig:
    """Tests for ModelClientConfig."""

    def test_litellm_model_name(self):
        assert config().get_litellm_model() == "gemini/gemini-2.5-flash"

    def test_prefixed_model_is_kept(self):
        cfg = ModelClientConfig(provider="gemini", model="gemini/gemini-2.5-pro", api_key="k")
        assert cfg.get_litellm_model() == "gemini/gemini-2.5-pro"

    def test_from_settings(self):
        settings = Settings(gemini_api_key="abc", llm_temperature=0.5)
        cfg = ModelClientConfig.from_settings(settings)
        assert cfg.api_key == "abc"
        assert cfg.to_litellm_kwargs()["temperature"] == 0.5


class TestLiteLLMClient:
    """Tests for LiteLLMClient."""

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError):
            LiteLLMClient(config(api_key=None))

    def test_missing_api_key_from_settings(self):
        with pytest.raises(ConfigurationError):
            create_model_client(Settings(gemini_api_key=None))

    def test_complete(self):
        client = LiteLLMClient(config())
        with patch(ACOMPLETION, new=AsyncMock(return_value=litellm_response("{}"))) as mock_call:
            response = asyncio.run(client.complete([{"role": "user", "content": "hi"}], max_tokens=None))

        kwargs = mock_call.call_args.kwargs
        assert kwargs["model"] == "gemini/gemini-2.5-flash"
        assert kwargs["api_key"] == "test-key"
        assert kwargs["max_tokens"] == 8192
        assert response.content == "{}"
        assert response.usage.total_tokens == 120

    def test_failure_is_invocation_error(self):
        client = LiteLLMClient(config())
        with patch(ACOMPLETION, new=AsyncMock(side_effect=RuntimeError("quota exceeded"))):
            with pytest.raises(InvocationError, match="quota exceeded"):
                asyncio.run(client.complete([]))


class TestModelInvoker:
    """Tests for ModelInvoker."""

    def setup_method(self):
        self.pages = [
            EncodedPage(data=b"page-one", mime_type="image/jpeg"),
            EncodedPage(data=b"page-two", mime_type="image/png"),
        ]

    def test_one_text_part_then_images_in_order(self):
        client = FakeModelClient("{}")
        prompt = PromptBuilder().build(2, "Amharic")

        asyncio.run(ModelInvoker(client).invoke(prompt, self.pages))

        assert len(client.calls) == 1
        content = client.calls[0]["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": prompt.text}
        urls = [part["image_url"]["url"] for part in content[1:]]
        assert urls == [
            "data:image/jpeg;base64," + base64.b64encode(b"page-one").decode(),
            "data:image/png;base64," + base64.b64encode(b"page-two").decode(),
        ]

    def test_safety_settings_are_sent(self):
        client = FakeModelClient("{}")
        asyncio.run(ModelInvoker(client).invoke("prompt", self.pages))

        sent = client.calls[0]["kwargs"]["safety_settings"]
        assert sent == SAFETY_SETTINGS
        assert {s["threshold"] for s in sent} == {"BLOCK_NONE"}
        assert len(sent) == 4

    def test_through_litellm(self):
        invoker = ModelInvoker(LiteLLMClient(config()))
        with patch(ACOMPLETION, new=AsyncMock(return_value=litellm_response('{"a": 1}'))) as mock_call:
            response = asyncio.run(invoker.invoke("prompt", self.pages))

        assert mock_call.await_count == 1
        assert mock_call.call_args.kwargs["safety_settings"] == SAFETY_SETTINGS
        assert response.content == '{"a": 1}'

    def test_no_pages(self):
        with pytest.raises(InputError):
            asyncio.run(ModelInvoker(FakeModelClient()).invoke("prompt", []))

    def test_unexpected_client_error_is_wrapped(self):
        client = FakeModelClient()
        client.complete = AsyncMock(side_effect=ValueError("boom"))
        with pytest.raises(InvocationError):
            asyncio.run(ModelInvoker(client).invoke("prompt", self.pages))
