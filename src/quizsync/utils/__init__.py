"""
Utility modules for the quiz sync agent.
"""

from .text_processor import TextProcessor, summarize_question_text

__all__ = [
    'TextProcessor',
    'summarize_question_text'
]
