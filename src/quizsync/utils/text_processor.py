"""
Text Processing Utilities

This module provides text helpers used when logging scraped quiz content.
Uploaded text is always the raw rendered text; these helpers only shape
what is written to the log.
"""

from typing import List

from quizsync.constants import ANSWER_LINE_PREFIXES


class TextProcessor:
    """
    Condenses rendered question and answer text for log output.
    """

    @staticmethod
    def non_empty_lines(text: str) -> List[str]:
        """
        Split text into stripped, non-empty lines.

        Args:
            text: Raw rendered text

        Returns:
            List[str]: Lines with surrounding whitespace removed
        """
        if not text:
            return []
        return [line.strip() for line in text.splitlines() if line.strip()]

    @staticmethod
    def summarize_question_text(text: str) -> str:
        """
        Reduce a question container's text to its prompt.

        A container renders as the question number, the prompt and then one
        line per option ("A: ...", "B: ..."), each followed by the option
        text. The option block is dropped and the rest is formatted as
        "<number>. <prompt>".

        Args:
            text: Full rendered text of a question container

        Returns:
            str: Condensed question text
        """
        lines = TextProcessor.non_empty_lines(text)
        option_count = sum(1 for line in lines if line.startswith(ANSWER_LINE_PREFIXES))
        kept = [line for line in lines if not line.startswith(ANSWER_LINE_PREFIXES)]
        if option_count:
            kept = kept[:max(len(kept) - option_count, 0)]

        if not kept:
            return ""
        head, rest = kept[0], kept[1:]
        return f"{head}. " + "\n".join(rest)

    @staticmethod
    def one_line(text: str, limit: int = 80) -> str:
        """Collapse text onto one line and truncate it for log messages."""
        collapsed = " ".join(TextProcessor.non_empty_lines(text))
        if len(collapsed) > limit:
            return collapsed[:limit - 3] + "..."
        return collapsed


def summarize_question_text(text: str) -> str:
    return TextProcessor.summarize_question_text(text)
