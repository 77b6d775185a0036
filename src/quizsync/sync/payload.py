from typing import Any, Dict

from quizsync.models import QuizModel, Resolution


def build_payload(model: QuizModel, resolution: Resolution) -> Dict[str, Any]:
    """
    Snapshot a run for the collection service.

    Carries the full question and answer text maps, the group identity and,
    for guessed questions only, the candidate list and the guess. Keys are
    left as ints; they become strings when serialized to JSON.
    """
    unknown_questions = {
        question_id: {
            'answers': list(record.answers),
            'answerUsed': record.answer_used,
        }
        for question_id, record in resolution.unknown.items()
    }

    return {
        'questionMap': {question.id: question.text for question in model.questions},
        'answerMap': {answer_id: answer.text for answer_id, answer in model.answers.items()},
        'unknownQuestions': unknown_questions,
        'groupText': model.group.text,
        'group': model.group.code,
    }
