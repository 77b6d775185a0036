"""
Run orchestration.

One run is a fixed forward pipeline over a single page visit:

    scrape -> fetch known answers -> resolve -> fill in page -> build payload -> upload

Both service calls run in a worker thread and are awaited, so the fetch
always completes before resolution starts, and the page is fully
filled in before the upload is sent. There is no retry and no re-entry
guard: calling run() again scrapes and uploads again.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from quizsync.constants import MISSING_ID_SKIP
from quizsync.models import AnswerCache, QuizModel, Resolution
from quizsync.resolver import AnswerResolver
from quizsync.scraper.base import BaseQuizPage
from quizsync.scraper.extractor import QuizExtractor
from quizsync.scraper.mutator import apply_answers
from quizsync.sync.client import SyncClient
from quizsync.sync.payload import build_payload
from quizsync.utils.text_processor import TextProcessor


@dataclass
class RunReport:
    model: QuizModel
    resolution: Resolution
    payload: Dict[str, Any]
    fetched: bool
    uploaded: Optional[bool] = None
    cache: AnswerCache = field(default_factory=dict)


class QuizAgent:
    def __init__(self, client: SyncClient, resolver: Optional[AnswerResolver] = None,
                 missing_id_policy: str = MISSING_ID_SKIP, verbose: bool = False,
                 upload: bool = True):
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.resolver = resolver or AnswerResolver()
        self.extractor = QuizExtractor(missing_id_policy, verbose)
        self.upload = upload

    async def run(self, page: BaseQuizPage, cache: Optional[AnswerCache] = None) -> RunReport:
        """
        Run the whole pipeline once against page.

        cache seeds the answer cache before the fetch merges into it; it is
        mutated in place.
        """
        cache = {} if cache is None else cache

        model = await self.extractor.scrape(page)

        fetched = await asyncio.to_thread(self.client.fetch_known_answers, cache)
        if not fetched:
            self.logger.warning("Continuing without known answers from the service")

        resolution = self.resolver.resolve(model, cache)
        await apply_answers(page, model, resolution)
        self._log_unknown(model, resolution)

        payload = build_payload(model, resolution)
        report = RunReport(model=model, resolution=resolution, payload=payload,
                           fetched=fetched, cache=cache)

        if self.upload:
            report.uploaded = await asyncio.to_thread(self.client.submit_results, payload)
        else:
            self.logger.info("Upload disabled - results not sent")

        return report

    def _log_unknown(self, model: QuizModel, resolution: Resolution) -> None:
        self.logger.info("Unknown questions and guessed answer:")
        for question_id, record in resolution.unknown.items():
            question = model.question(question_id)
            self.logger.info(
                f"{question_id} ({TextProcessor.summarize_question_text(question.text)}): "
                f"{record.answer_used} ({TextProcessor.one_line(model.answer_text(record.answer_used))})"
            )
