import logging
from typing import Any, List, Optional

from playwright.async_api import Browser, Page, Playwright, TimeoutError as PlaywrightTimeoutError # type: ignore

from quizsync.constants import (
    SELECTORS, QUESTION_ID_ATTRIBUTE, ANSWER_TEXT_DEPTH, TIMEOUTS
)
from quizsync.scraper.base import BaseQuizPage


class PlaywrightQuizPage(BaseQuizPage):
    """Quiz page access on top of a live Playwright tab."""

    def __init__(self, page: Page):
        super().__init__()
        self.page = page

    async def text_of(self, selector: str) -> Optional[str]:
        element = await self.page.query_selector(selector)
        if element is None:
            return None
        return await element.inner_text()

    async def question_containers(self) -> List[Any]:
        return await self.page.query_selector_all(SELECTORS['question_box'])

    async def attribute(self, handle: Any, name: str) -> Optional[str]:
        return await handle.get_attribute(name)

    async def inner_text(self, handle: Any) -> str:
        return await handle.inner_text()

    async def answer_controls(self, container: Any) -> List[Any]:
        return await container.query_selector_all(SELECTORS['answer_control'])

    async def control_value(self, control: Any) -> str:
        return await control.input_value()

    async def answer_text_container(self, control: Any) -> Any:
        handle = await control.evaluate_handle(
            """
            (element, depth) => {
                let current = element;
                for (let i = 0; i < depth && current.parentNode != null; i++) {
                    current = current.parentNode;
                }
                return current;
            }
            """,
            ANSWER_TEXT_DEPTH,
        )
        return handle.as_element()

    async def select_answer(self, question_id: int, answer_id: int) -> bool:
        selector = (
            f'{SELECTORS["question_box"]}[{QUESTION_ID_ATTRIBUTE}="{question_id}"] '
            f'input[value="{answer_id}"]'
        )
        control = await self.page.query_selector(selector)
        if control is None:
            return False

        try:
            await control.click(timeout=TIMEOUTS['click'])
        except PlaywrightTimeoutError:
            # Hidden or covered inputs still accept a DOM-level click
            self.logger.debug(f"Standard click timed out for {selector} - using JavaScript click")
            await control.evaluate('element => element.click()')

        if not await control.is_checked():
            self.logger.warning(f"Control {selector} did not report checked after click")
        return True

    async def submit(self, selector: str) -> bool:
        button = await self.page.query_selector(selector)
        if button is None:
            return False
        await button.click(timeout=TIMEOUTS['click'])
        self.logger.info(f"Submitted quiz via {selector}")
        return True


class BrowserSession:
    """
    Owns the Playwright driver and a single Chromium tab.

    Usage:
        async with BrowserSession(headless=True) as session:
            page = await session.open_quiz(url)
    """

    def __init__(self, headless: bool = True, navigation_timeout: int = TIMEOUTS['page_load']):
        self.logger = logging.getLogger(__name__)
        self.headless = headless
        self.navigation_timeout = navigation_timeout
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.page: Optional[Page] = None

    async def initialize(self) -> None:
        """Launch the browser and open an empty tab."""
        try:
            from playwright.async_api import async_playwright # type: ignore
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(headless=self.headless)
            self.page = await self.browser.new_page()
            self.logger.info(f"Browser initialized (headless={self.headless})")
        except Exception as e:
            self.logger.error(f"Failed to initialize browser: {e}")
            raise

    async def close(self) -> None:
        """Close the browser instance."""
        if self.browser:
            try:
                await self.browser.close()
                self.logger.info("Browser closed successfully")
            except Exception as e:
                self.logger.error(f"Error closing browser: {e}")
        if self.playwright:
            await self.playwright.stop()

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def open_quiz(self, url: str, start_selector: Optional[str] = None) -> PlaywrightQuizPage:
        """Navigate to a quiz and, if configured, press its start button."""
        self.logger.info(f"Navigating to {url}")
        await self.page.goto(url, timeout=self.navigation_timeout)
        await self.page.wait_for_load_state('domcontentloaded')

        if start_selector:
            await self._start_quiz(start_selector)

        return PlaywrightQuizPage(self.page)

    async def _start_quiz(self, start_selector: str) -> None:
        start_btn = await self.page.query_selector(start_selector)
        if start_btn is None:
            self.logger.info(f"No start button matching {start_selector!r} - quiz may already be started")
            return

        await start_btn.click()
        self.logger.info("Clicked start button - waiting for questions to render")
        await self.page.wait_for_selector(SELECTORS['question_box'], timeout=TIMEOUTS['start_wait'])
