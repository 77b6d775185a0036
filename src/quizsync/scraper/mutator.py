import logging

from quizsync.errors import MarkupContractError
from quizsync.models import QuizModel, Resolution
from quizsync.scraper.base import BaseQuizPage
from quizsync.utils.text_processor import TextProcessor

logger = logging.getLogger(__name__)


async def apply_answers(page: BaseQuizPage, model: QuizModel, resolution: Resolution) -> None:
    """Select every resolved answer on the page, in resolution order."""
    for resolved in resolution.answers:
        selected = await page.select_answer(resolved.question_id, resolved.answer_id)
        if not selected:
            raise MarkupContractError(
                f"No control for answer {resolved.answer_id} in question {resolved.question_id}"
            )
        logger.info(
            f"Clicking answer {resolved.answer_id} "
            f"({TextProcessor.one_line(model.answer_text(resolved.answer_id))}) "
            f"for question {resolved.question_id}"
            + (" [guessed]" if resolved.guessed else "")
        )
