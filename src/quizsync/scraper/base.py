from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging


class BaseQuizPage(ABC):
    """
    Access to a rendered quiz page.

    The scraper and mutator only talk to the page through this interface, so
    a live browser tab and an in-memory document are interchangeable. Element
    handles are opaque to callers; they are only passed back into the same
    page object that produced them.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__)

    @abstractmethod
    async def text_of(self, selector: str) -> Optional[str]:
        """Rendered text of the first element matching selector, or None if absent."""
        pass

    @abstractmethod
    async def question_containers(self) -> List[Any]:
        """All question containers in document order."""
        pass

    @abstractmethod
    async def attribute(self, handle: Any, name: str) -> Optional[str]:
        """Value of an attribute on a handle, or None if the attribute is absent."""
        pass

    @abstractmethod
    async def inner_text(self, handle: Any) -> str:
        """Full rendered text of a handle."""
        pass

    @abstractmethod
    async def answer_controls(self, container: Any) -> List[Any]:
        """Single-choice input controls nested inside a question container."""
        pass

    @abstractmethod
    async def control_value(self, control: Any) -> str:
        """The value attribute of an answer control."""
        pass

    @abstractmethod
    async def answer_text_container(self, control: Any) -> Any:
        """
        Element holding the display text of an answer control.

        Precondition on page structure: the label text lives
        ANSWER_TEXT_DEPTH ancestor levels above the control.
        """
        pass

    @abstractmethod
    async def select_answer(self, question_id: int, answer_id: int) -> bool:
        """
        Activate the control for answer_id inside question question_id.

        Returns False when no matching control exists on the page.
        """
        pass

    @abstractmethod
    async def submit(self, selector: str) -> bool:
        """
        Press the page's own submit control.

        Returns False when nothing matches selector.
        """
        pass
