import random

import pytest

from quizsync.models import Group, Question, QuizModel, Answer
from quizsync.resolver import AnswerResolver


def make_model(questions):
    model = QuizModel(group=Group(text="Sample Test", code=1))
    for question_id, answer_ids in questions.items():
        model.questions.append(Question(id=question_id, text=f"Q{question_id}", answer_ids=list(answer_ids)))
        for answer_id in answer_ids:
            model.answers[answer_id] = Answer(id=answer_id, text=f"A{answer_id}")
    return model


def test_known_and_guessed_mix():
    model = make_model({101: [1, 2], 102: [3, 4]})

    resolution = AnswerResolver(random.Random(0)).resolve(model, {101: 2})

    resolved = resolution.as_mapping()
    assert resolved[101] == 2
    assert resolved[102] in (3, 4)
    assert set(resolution.unknown) == {102}
    assert resolution.unknown[102].answers == [3, 4]
    assert resolution.unknown[102].answer_used == resolved[102]


def test_single_candidate_is_always_chosen():
    model = make_model({5: [7]})

    for seed in range(20):
        resolution = AnswerResolver(random.Random(seed)).resolve(model, {})
        assert resolution.as_mapping() == {5: 7}
        assert resolution.unknown[5].answers == [7]
        assert resolution.unknown[5].answer_used == 7


@pytest.mark.parametrize("seed", range(25))
def test_guesses_are_candidates(seed):
    model = make_model({1: [10, 11, 12, 13], 2: [20, 21], 3: [30, 31, 32]})

    resolution = AnswerResolver(random.Random(seed)).resolve(model, {})

    for resolved in resolution.answers:
        assert resolved.guessed
        assert resolved.answer_id in model.question(resolved.question_id).answer_ids


def test_full_cache_needs_no_guesses():
    model = make_model({1: [10, 11], 2: [20, 21]})
    cache = {1: 11, 2: 20}

    resolution = AnswerResolver().resolve(model, cache)

    assert resolution.as_mapping() == cache
    assert resolution.unknown == {}
    assert resolution.known_count == 2
    assert not any(resolved.guessed for resolved in resolution.answers)


def test_cached_answer_used_verbatim():
    model = make_model({1: [10, 11]})
    resolution = AnswerResolver().resolve(model, {1: 99})
    assert resolution.as_mapping() == {1: 99}


def test_same_seed_same_guesses():
    model = make_model({q: [q * 10 + i for i in range(4)] for q in range(1, 30)})

    first = AnswerResolver.seeded(1234).resolve(model, {})
    second = AnswerResolver.seeded(1234).resolve(model, {})

    assert first.as_mapping() == second.as_mapping()


def test_guess_spreads_over_all_candidates():
    # Every candidate, including ones past the fourth, must be reachable
    model = make_model({1: [1, 2, 3, 4, 5, 6]})
    resolver = AnswerResolver(random.Random(7))

    seen = {resolver.resolve(model, {}).as_mapping()[1] for _ in range(300)}

    assert seen == {1, 2, 3, 4, 5, 6}


def test_resolution_keeps_question_order():
    model = make_model({3: [1], 1: [2], 2: [3]})
    resolution = AnswerResolver().resolve(model, {})
    assert [resolved.question_id for resolved in resolution.answers] == [3, 1, 2]
