"""Prompt models.

A prompt is assembled from an ordered list of sections. Each section can be
left out independently; numbering is computed from the sections that remain,
so omitting one never leaves a gap.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PromptSection(BaseModel):
    """One numbered instruction block."""

    key: str = Field(..., description="Stable identifier, e.g. 'language_hints'")
    title: str = Field(..., description="Short bold heading of the instruction")
    body: str = Field(..., description="Instruction text")
    bullets: List[str] = Field(default_factory=list, description="Optional sub-items")
    include: bool = Field(default=True, description="Whether the section is rendered")

    def render(self, number: int) -> str:
        lines = [f"{number}. **{self.title}**: {self.body}"]
        lines.extend(f"   - {item}" for item in self.bullets)
        return "\n".join(lines)


class PromptBundle(BaseModel):
    """Complete prompt package ready for the model.

    Output of the PromptBuilder and text input of the ModelInvoker.
    """

    text: str = Field(..., description="Rendered instruction text")
    sections: List[str] = Field(
        default_factory=list, description="Keys of the sections that were included, in order"
    )
    page_count: int = Field(..., ge=1)
    source_language: str = Field(..., description="Selector value the prompt was built for")

    # Model configuration overrides
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)

    def estimate_tokens(self) -> int:
        """Rough token estimate for the text part (~4 characters per token)."""
        return len(self.text) // 4

    def to_preview_dict(self) -> Dict[str, Any]:
        return {
            "prompt": self.text,
            "sections": self.sections,
            "page_count": self.page_count,
            "source_language": self.source_language,
            "estimated_tokens": self.estimate_tokens(),
        }
