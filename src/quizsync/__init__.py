"""
quizsync

Fills in a rendered quiz page from an answer cache kept by a collection
service, guesses the rest, and reports the guesses back to the service.
"""

__version__ = "1.0.0"

from .agent import QuizAgent, RunReport
from .resolver import AnswerResolver
from .scraper.extractor import QuizExtractor, scrape_quiz
from .scraper.html_page import HtmlQuizPage
from .sync.client import Credential, SyncClient
from .sync.payload import build_payload

__all__ = [
    'QuizAgent',
    'RunReport',
    'AnswerResolver',
    'QuizExtractor',
    'scrape_quiz',
    'HtmlQuizPage',
    'Credential',
    'SyncClient',
    'build_payload'
]
