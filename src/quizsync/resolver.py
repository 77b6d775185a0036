"""
Answer resolution.

Every question gets an answer: the known one from the answer cache when
there is one, otherwise a uniformly random candidate. Guesses are recorded
separately so they can be reported to the collection service.
"""

import logging
import random
from typing import Optional

from quizsync.models import (
    AnswerCache, QuizModel, Resolution, ResolvedAnswer, UnknownQuestionRecord
)
from quizsync.utils.text_processor import TextProcessor


class AnswerResolver:
    """
    Chooses an answer id for each question.

    The random source is injected so runs can be reproduced; it is the only
    source of non-determinism in a run.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.logger = logging.getLogger(__name__)
        self.rng = rng or random.Random()

    @classmethod
    def seeded(cls, seed: Optional[int]) -> "AnswerResolver":
        return cls(random.Random(seed))

    def resolve(self, model: QuizModel, cache: AnswerCache) -> Resolution:
        resolution = Resolution()

        for question in model.questions:
            self.logger.debug(
                f"Answering {question.id} ({TextProcessor.one_line(question.text)})"
            )
            known = cache.get(question.id)
            if known is not None:
                # Cached ids are trusted as-is
                resolution.answers.append(ResolvedAnswer(question.id, known))
                continue

            guess = question.answer_ids[self.rng.randrange(len(question.answer_ids))]
            resolution.answers.append(ResolvedAnswer(question.id, guess, guessed=True))
            resolution.unknown[question.id] = UnknownQuestionRecord(
                question_id=question.id,
                answers=list(question.answer_ids),
                answer_used=guess,
            )

        self.logger.info(
            f"Resolved {len(resolution.answers)} questions: "
            f"{resolution.known_count} known, {len(resolution.unknown)} guessed"
        )
        return resolution
