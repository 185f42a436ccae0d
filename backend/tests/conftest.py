"""Shared fixtures for letter translator tests."""

from io import BytesIO
from typing import Any, Dict, List

import pytest
from PIL import Image

from letter_translator.core.translation import ModelClient, RawModelResponse


def make_image_bytes(width: int = 40, height: int = 20, fmt: str = "PNG", color=(200, 30, 30)) -> bytes:
    """Encode a solid-colour image in memory."""
    image = Image.new("RGB", (width, height), color)
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


class FakeModelClient(ModelClient):
    """Model client returning a canned response and recording calls."""

    def __init__(self, content: str = "{}"):
        self.content = content
        self.calls: List[Dict[str, Any]] = []

    @property
    def provider(self) -> str:
        return "fake"

    @property
    def model(self) -> str:
        return "fake-vision"

    async def complete(self, messages, **kwargs) -> RawModelResponse:
        self.calls.append({"messages": messages, "kwargs": kwargs})
        return RawModelResponse(content=self.content, provider=self.provider, model=self.model)


SAMPLE_RESPONSE = 'Here you go:\n```json\n{"nativeScript":"X","naturalEnglish":"Y","culturalInsights":"Z","headerInfo":{}}\n```'


@pytest.fixture
def png_bytes():
    """Landscape PNG page (40x20)."""
    return make_image_bytes()


@pytest.fixture
def jpeg_bytes():
    """Portrait JPEG page (20x40)."""
    return make_image_bytes(20, 40, fmt="JPEG")


@pytest.fixture
def fake_client():
    return FakeModelClient(SAMPLE_RESPONSE)
