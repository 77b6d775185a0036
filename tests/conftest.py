import json
import threading
from typing import Dict, List, Optional

import pytest
import requests

from quizsync.scraper.html_page import HtmlQuizPage
from quizsync.sync.client import Credential, SyncClient

LETTERS = "ABCD"


def render_question(question_id: Optional[int], answer_ids: List[int]) -> str:
    id_attr = f' data-id="{question_id}"' if question_id is not None else ''
    options = "\n".join(
        f'<li class="answer"><label><input type="radio" name="q{question_id}" value="{answer_id}"> '
        f'{LETTERS[index % 4]}:</label> <span>Answer {answer_id}</span></li>'
        for index, answer_id in enumerate(answer_ids)
    )
    return (
        f'<div class="question-box"{id_attr}>\n'
        f'<div class="number">Question {question_id}</div>\n'
        f'<div class="prompt">Prompt for {question_id}?</div>\n'
        f'<ul>\n{options}\n</ul>\n'
        f'</div>'
    )


def render_quiz(questions: Dict[int, List[int]], title: str = "Sample Test",
                code_label: str = "Code: 4521", extra: str = "") -> str:
    boxes = "\n".join(render_question(qid, aids) for qid, aids in questions.items())
    return f"""<html><body>
<div class="row">
  <div class="col-12"><h1>{title}</h1></div>
  <div class="row"><div class="col-12"><div>{code_label}</div></div></div>
</div>
{boxes}
{extra}
</body></html>"""


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self.text = body if isinstance(body, str) else json.dumps(body if body is not None else {})

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; records every call in order."""

    def __init__(self, get_response=None, post_response=None):
        self.headers = {}
        self.get_response = get_response if get_response is not None else FakeResponse(200, {})
        self.post_response = post_response if post_response is not None else FakeResponse(200, "")
        self.calls = []
        self.threads = []

    def _reply(self, response):
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        self.calls.append(('GET', url, kwargs))
        self.threads.append(threading.get_ident())
        return self._reply(self.get_response)

    def post(self, url, **kwargs):
        self.calls.append(('POST', url, kwargs))
        self.threads.append(threading.get_ident())
        return self._reply(self.post_response)

    def uploaded_body(self):
        posts = [call for call in self.calls if call[0] == 'POST']
        return json.loads(posts[-1][2]['data'])


@pytest.fixture
def quiz_page():
    def build(questions: Dict[int, List[int]], **kwargs) -> HtmlQuizPage:
        return HtmlQuizPage(render_quiz(questions, **kwargs))
    return build


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def client_factory():
    def build(session: FakeSession, base_url: str = "http://localhost:5000/api", timeout=None) -> SyncClient:
        return SyncClient(Credential.from_api_key("secret"), base_url=base_url,
                          session=session, timeout=timeout)
    return build


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")


@pytest.fixture
def question_markup():
    return render_question
