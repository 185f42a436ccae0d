"""Model response models.

The raw model response is untrusted text. It is kept whole, with enough
metadata to diagnose a bad answer, and parsed exactly once.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class TokenUsage(BaseModel):
    """Token consumption details."""

    prompt_tokens: int = Field(default=0)
    completion_tokens: int = Field(default=0)
    total_tokens: int = Field(default=0)

    def model_post_init(self, __context: Any) -> None:
        """Calculate total if not provided."""
        if not self.total_tokens and (self.prompt_tokens or self.completion_tokens):
            self.total_tokens = self.prompt_tokens + self.completion_tokens


class RawModelResponse(BaseModel):
    """Unparsed text returned by the vision-language model."""

    content: str = Field(..., description="Response text, untrusted")
    provider: str = Field(..., description="Model provider name")
    model: str = Field(..., description="Model identifier used")
    usage: TokenUsage = Field(default_factory=TokenUsage)
    latency_ms: int = Field(default=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
