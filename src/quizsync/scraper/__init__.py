"""
Page access for quiz pages.

This package contains the page-access interface, its browser and in-memory
implementations, and the extraction and answer-filling steps built on it.
The browser implementation is imported from quizsync.scraper.browser so the
in-memory page can be used without a Playwright install.
"""

from .base import BaseQuizPage
from .html_page import HtmlQuizPage
from .extractor import QuizExtractor, scrape_quiz, parse_group_code
from .mutator import apply_answers

__all__ = [
    'BaseQuizPage',
    'HtmlQuizPage',
    'QuizExtractor',
    'scrape_quiz',
    'parse_group_code',
    'apply_answers'
]
