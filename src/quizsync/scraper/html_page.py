"""
In-memory quiz page backed by BeautifulSoup.

Used for offline dry runs against a saved page and as the page fixture in
tests. Selecting an answer marks the matching radio input as checked in the
parsed document, which is the same state a browser click leaves behind.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from quizsync.constants import (
    SELECTORS, QUESTION_ID_ATTRIBUTE, ANSWER_TEXT_DEPTH
)
from quizsync.scraper.base import BaseQuizPage


class HtmlQuizPage(BaseQuizPage):
    def __init__(self, html: str):
        super().__init__()
        self.soup = BeautifulSoup(html, "html.parser")
        self.submitted_with: Optional[str] = None

    @classmethod
    def from_file(cls, path: str) -> "HtmlQuizPage":
        return cls(Path(path).read_text(encoding='utf-8'))

    @staticmethod
    def _render(element) -> str:
        return element.get_text("\n", strip=True)

    async def text_of(self, selector: str) -> Optional[str]:
        element = self.soup.select_one(selector)
        if element is None:
            return None
        return self._render(element)

    async def question_containers(self) -> List[Any]:
        return self.soup.select(SELECTORS['question_box'])

    async def attribute(self, handle: Any, name: str) -> Optional[str]:
        value = handle.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    async def inner_text(self, handle: Any) -> str:
        return self._render(handle)

    async def answer_controls(self, container: Any) -> List[Any]:
        return container.select(SELECTORS['answer_control'])

    async def control_value(self, control: Any) -> str:
        return control.get("value", "")

    async def answer_text_container(self, control: Any) -> Any:
        current = control
        for _ in range(ANSWER_TEXT_DEPTH):
            if current.parent is None:
                break
            current = current.parent
        return current

    def _find_control(self, question_id: int, answer_id: int):
        selector = (
            f'{SELECTORS["question_box"]}[{QUESTION_ID_ATTRIBUTE}="{question_id}"] '
            f'input[value="{answer_id}"]'
        )
        return self.soup.select_one(selector)

    async def select_answer(self, question_id: int, answer_id: int) -> bool:
        control = self._find_control(question_id, answer_id)
        if control is None:
            return False

        container = control.find_parent(class_=SELECTORS['question_box'].lstrip('.'))
        siblings = container.select(SELECTORS['answer_control']) if container else [control]
        for sibling in siblings:
            if sibling.get("name") == control.get("name"):
                sibling.attrs.pop("checked", None)
        control["checked"] = "checked"
        self.logger.debug(f"Checked input value={answer_id} in question {question_id}")
        return True

    def checked_answers(self) -> Dict[int, int]:
        """Question id -> value of its checked radio input."""
        checked = {}
        for container in self.soup.select(SELECTORS['question_box']):
            question_id = container.get(QUESTION_ID_ATTRIBUTE)
            if question_id is None:
                continue
            control = container.select_one(f'{SELECTORS["answer_control"]}[checked]')
            if control is not None:
                checked[int(question_id)] = int(control["value"])
        return checked

    async def submit(self, selector: str) -> bool:
        if self.soup.select_one(selector) is None:
            return False
        self.submitted_with = selector
        return True
