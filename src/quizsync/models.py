"""
Data Models for a Quiz Run
==========================

In-memory structures built fresh for every page visit: the scraped quiz,
the resolved answers and the records of guessed questions. All models are
implemented as dataclasses.
"""

from dataclasses import dataclass, field
from typing import Dict, List

# question id -> previously known answer id
AnswerCache = Dict[int, int]


@dataclass
class Answer:
    id: int
    text: str


@dataclass
class Question:
    id: int
    text: str
    answer_ids: List[int] = field(default_factory=list)


@dataclass
class Group:
    text: str
    code: int


@dataclass
class QuizModel:
    group: Group
    questions: List[Question] = field(default_factory=list)
    answers: Dict[int, Answer] = field(default_factory=dict)

    def question(self, question_id: int) -> Question:
        for question in self.questions:
            if question.id == question_id:
                return question
        raise KeyError(question_id)

    def answer_text(self, answer_id: int) -> str:
        answer = self.answers.get(answer_id)
        return answer.text if answer else ''


@dataclass
class ResolvedAnswer:
    question_id: int
    answer_id: int
    guessed: bool = False


@dataclass
class UnknownQuestionRecord:
    question_id: int
    answers: List[int]
    answer_used: int


@dataclass
class Resolution:
    answers: List[ResolvedAnswer] = field(default_factory=list)
    unknown: Dict[int, UnknownQuestionRecord] = field(default_factory=dict)

    def as_mapping(self) -> Dict[int, int]:
        """Question id -> chosen answer id, in resolution order."""
        return {resolved.question_id: resolved.answer_id for resolved in self.answers}

    @property
    def known_count(self) -> int:
        return len(self.answers) - len(self.unknown)
