"""Prompt engine for letter translation.

This module builds the single instruction text sent to the model alongside
the page images. The prompt is an ordered list of PromptSections; sections
that do not apply are switched off and the remaining ones are numbered
consecutively at render time.
"""

import logging
from typing import List, Optional, Union

from ...errors import InputError
from ..languages import get_language_profile
from ..models.context import SourceLanguage
from ..models.prompt import PromptBundle, PromptSection

logger = logging.getLogger(__name__)


# Restated verbatim in every prompt so the answer is self-describing.
OUTPUT_SCHEMA = """{
  "headerInfo": {
    "childName": "Name of the child, if written on the letter",
    "childID": "Child or document ID, if written on the letter",
    "writtenBy": "Who wrote the letter (e.g. child, parent, caregiver), if stated"
  },
  "nativeScript": "Verbatim transcription of all pages in the original script",
  "naturalEnglish": "Natural, fluent English translation of the whole letter",
  "culturalInsights": "Explanation of idioms, cultural references and nuances"
}"""


class PromptBuilder:
    """Builds the translation prompt for a page count and source language."""

    INTRO = (
        "You are an expert linguist and translator specializing in handwritten "
        "personal correspondence."
    )

    def build(
        self,
        page_count: int,
        source_language: Union[SourceLanguage, str] = SourceLanguage.AUTO,
    ) -> PromptBundle:
        """Build the prompt bundle.

        Args:
            page_count: Number of page images sent with the prompt (>= 1)
            source_language: Selected language, or Auto-Detect

        Returns:
            PromptBundle with the rendered text

        Raises:
            InputError: If page_count is below 1 or the language is unknown
        """
        if page_count < 1:
            raise InputError("At least one page is required to build a prompt")
        try:
            language = SourceLanguage.parse(source_language)
        except ValueError as e:
            raise InputError(str(e)) from e

        sections = self.get_sections(page_count, language)
        included = [s for s in sections if s.include]
        text = self.render(page_count, language, included)

        logger.debug(
            f"Built prompt: pages={page_count}, language={language.value}, "
            f"sections={[s.key for s in included]}"
        )

        return PromptBundle(
            text=text,
            sections=[s.key for s in included],
            page_count=page_count,
            source_language=language.value,
        )

    def get_sections(self, page_count: int, language: SourceLanguage) -> List[PromptSection]:
        """All instruction blocks in order, with ``include`` set per request."""
        profile = get_language_profile(language)
        last_page = f"page {page_count}"
        plural = "s" if page_count > 1 else ""

        return [
            PromptSection(
                key="all_pages",
                title="Read every page",
                body=(
                    f"There {'are' if page_count > 1 else 'is'} {page_count} page{plural}, "
                    f"provided in order from page 1 to {last_page}. Read all {page_count} "
                    f"page{plural} and continue to the final page before answering. "
                    f"Closings and signatures usually appear on {last_page}; do not stop early."
                ),
            ),
            PromptSection(
                key="language_detection",
                title="Detect the language",
                body=(
                    "The source language was not specified. Identify the language and "
                    "script of the handwriting and report it by starting culturalInsights "
                    "with \"Detected language: <language>.\""
                ),
                include=language.is_auto,
            ),
            PromptSection(
                key="header",
                title="Header information",
                body=(
                    "If the letter shows a child's name, a child or document ID, or who "
                    "wrote it (child, parent, caregiver, staff), extract them into "
                    "headerInfo. Leave a field empty if it is not visible; never guess."
                ),
            ),
            PromptSection(
                key="transcription",
                title="Transcription",
                body=(
                    "Transcribe the handwriting verbatim in its original script, page by "
                    "page, into nativeScript."
                ),
            ),
            PromptSection(
                key="page_breaks",
                title="Sentences across pages",
                body=(
                    "A sentence that is cut off at the bottom of one page and continues on "
                    "the next must be joined into a single sentence in the translation."
                ),
                include=page_count > 1,
            ),
            PromptSection(
                key="language_hints",
                title=f"{profile.name} guidance" if profile else "Language guidance",
                body=(
                    f"The letter is written in {profile.name} ({profile.script} script). "
                    "Pay particular attention to:"
                    if profile
                    else ""
                ),
                bullets=list(profile.hints) if profile else [],
                include=profile is not None,
            ),
            PromptSection(
                key="translation",
                title="Translation",
                body=(
                    "Translate the whole letter into natural, fluent English in "
                    "naturalEnglish, preserving the writer's tone and paragraph breaks."
                ),
            ),
            PromptSection(
                key="cultural_insights",
                title="Cultural insights",
                body=(
                    "Explain idioms, festivals, kinship terms and other cultural "
                    "references in culturalInsights."
                ),
            ),
            PromptSection(
                key="output_format",
                title="Output format",
                body=(
                    "Return ONLY a single valid JSON object matching the structure below. "
                    "Do not wrap it in markdown code blocks and do not add any text "
                    "before or after the object."
                ),
            ),
        ]

    def render(
        self,
        page_count: int,
        language: SourceLanguage,
        sections: List[PromptSection],
    ) -> str:
        """Render included sections, numbering them 1..n."""
        profile = get_language_profile(language)
        if profile:
            language_line = f"The letter is written in {profile.name}."
        else:
            language_line = "The language of the letter is not known in advance."

        noun = "photographs" if page_count > 1 else "photograph"
        parts: List[str] = [
            self.INTRO,
            f"You are given {page_count} {noun} of a handwritten letter. {language_line}",
            "",
            "Follow these instructions:",
        ]
        parts.extend(section.render(number) for number, section in enumerate(sections, start=1))
        parts.extend(["", "Return the result with exactly this JSON structure:", OUTPUT_SCHEMA])
        return "\n".join(parts)

    def preview(self, page_count: int, source_language: Optional[str] = None) -> dict:
        """Preview the prompt without calling the model."""
        bundle = self.build(page_count, source_language or SourceLanguage.AUTO)
        return bundle.to_preview_dict()
