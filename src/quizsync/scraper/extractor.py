"""
Quiz structure extraction.

Reads the group identity, the questions and every candidate answer from a
rendered quiz page into a QuizModel. The page is never modified here.
"""

import logging
from typing import Any, Optional

from quizsync.constants import (
    SELECTORS, QUESTION_ID_ATTRIBUTE, GROUP_CODE_DELIMITER,
    MISSING_ID_SKIP, MISSING_ID_FAIL, MISSING_ID_POLICIES
)
from quizsync.errors import MarkupContractError
from quizsync.models import Answer, Group, Question, QuizModel
from quizsync.scraper.base import BaseQuizPage
from quizsync.utils.text_processor import TextProcessor


def parse_group_code(label: str) -> int:
    """
    Parse the numeric group code out of the code label.

    The label looks like "Code: 1234"; the last delimited fragment is the code.
    """
    fragments = label.split(GROUP_CODE_DELIMITER)
    fragments.reverse()
    try:
        return int(fragments[0].strip())
    except ValueError:
        raise MarkupContractError(f"Group code label {label!r} does not end in a number")


def _parse_id(raw: str, what: str) -> int:
    try:
        return int(raw.strip())
    except (AttributeError, ValueError):
        raise MarkupContractError(f"{what} {raw!r} is not numeric")


class QuizExtractor:
    """
    Builds a QuizModel from a page.

    missing_id_policy decides what happens to a question container without a
    question-id attribute: "skip" logs and ignores it, "fail" raises
    MarkupContractError.
    """

    def __init__(self, missing_id_policy: str = MISSING_ID_SKIP, verbose: bool = False):
        if missing_id_policy not in MISSING_ID_POLICIES:
            raise ValueError(
                f"Unknown missing id policy {missing_id_policy!r}, expected one of {MISSING_ID_POLICIES}"
            )
        self.logger = logging.getLogger(__name__)
        self.missing_id_policy = missing_id_policy
        self.verbose = verbose

    async def scrape(self, page: BaseQuizPage) -> QuizModel:
        group = await self._extract_group(page)
        model = QuizModel(group=group)

        containers = await page.question_containers()
        self.logger.debug(f"Found {len(containers)} question containers")

        for index, container in enumerate(containers):
            question = await self._extract_question(page, container, index, model)
            if question is None:
                continue
            model.questions.append(question)

        self.logger.info(f"Scraped {len(model.questions)} questions and {len(model.answers)} answers")
        for question in model.questions:
            self.logger.debug(f"{question.id}: {question.answer_ids}")

        if self.verbose:
            self._dump_text_maps(model)

        return model

    async def _extract_group(self, page: BaseQuizPage) -> Group:
        title = await page.text_of(SELECTORS['group_title'])
        if title is None:
            raise MarkupContractError(f"Group title not found at {SELECTORS['group_title']!r}")

        label = await page.text_of(SELECTORS['group_code'])
        if label is None:
            raise MarkupContractError(f"Group code label not found at {SELECTORS['group_code']!r}")

        group = Group(text=title, code=parse_group_code(label))
        self.logger.info(f"Test name: {group.text}")
        self.logger.info(f"Code: {group.code}")
        return group

    async def _extract_question(self, page: BaseQuizPage, container: Any, index: int,
                                model: QuizModel) -> Optional[Question]:
        raw_id = await page.attribute(container, QUESTION_ID_ATTRIBUTE)
        if raw_id is None:
            if self.missing_id_policy == MISSING_ID_FAIL:
                raise MarkupContractError(
                    f"Question container #{index} has no {QUESTION_ID_ATTRIBUTE} attribute"
                )
            self.logger.warning(
                f"Skipping question container #{index}: no {QUESTION_ID_ATTRIBUTE} attribute"
            )
            return None

        question_id = _parse_id(raw_id, "Question id")
        if any(existing.id == question_id for existing in model.questions):
            raise MarkupContractError(f"Duplicate question id {question_id}")

        question = Question(id=question_id, text=await page.inner_text(container))

        controls = await page.answer_controls(container)
        if not controls:
            raise MarkupContractError(f"Question {question_id} has no answer controls")

        for control in controls:
            answer = await self._extract_answer(page, control)
            question.answer_ids.append(answer.id)
            if answer.id in model.answers:
                self.logger.warning(f"Answer id {answer.id} appears in more than one question")
            model.answers[answer.id] = answer

        return question

    async def _extract_answer(self, page: BaseQuizPage, control: Any) -> Answer:
        answer_id = _parse_id(await page.control_value(control), "Answer id")
        text_container = await page.answer_text_container(control)
        if text_container is None:
            raise MarkupContractError(f"No answer text container for answer {answer_id}")
        return Answer(id=answer_id, text=await page.inner_text(text_container))

    def _dump_text_maps(self, model: QuizModel) -> None:
        self.logger.info("Answers:")
        for answer_id, answer in model.answers.items():
            self.logger.info(f"{answer_id}: {TextProcessor.one_line(answer.text)}")
        self.logger.info("Questions:")
        for question in model.questions:
            self.logger.info(f"{question.id}: {TextProcessor.summarize_question_text(question.text)}")


async def scrape_quiz(page: BaseQuizPage, missing_id_policy: str = MISSING_ID_SKIP,
                      verbose: bool = False) -> QuizModel:
    return await QuizExtractor(missing_id_policy, verbose).scrape(page)
