import asyncio
import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from quizsync.agent import QuizAgent, RunReport
from quizsync.config import AgentConfig
from quizsync.constants import DEFAULT_PATHS, MISSING_ID_POLICIES
from quizsync.errors import QuizSyncError
from quizsync.resolver import AnswerResolver
from quizsync.scraper.base import BaseQuizPage
from quizsync.scraper.html_page import HtmlQuizPage
from quizsync.sync.client import Credential, SyncClient


FILE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s'
CONSOLE_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(settings: Dict[str, Any]) -> None:
    """Route every quizsync logger to a rotating log file and the console."""
    log_settings = settings['logging']
    log_dir = os.path.dirname(log_settings['file'])
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_settings['file'],
        maxBytes=log_settings['max_size'],
        backupCount=log_settings['backup_count'],
        encoding='utf-8'
    )
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT, datefmt='%H:%M:%S'))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(getattr(logging, log_settings['level'].upper(), logging.INFO))
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.debug(f"Logging to {log_settings['file']} at {log_settings['level']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Fill in a quiz page from known answers and report guesses to the collection service'
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--url', type=str, help='Quiz page to open in a browser')
    source.add_argument('--html', type=str, help='Saved quiz page to run against offline')

    parser.add_argument('--config', type=str, default=DEFAULT_PATHS['config_file'],
                        help='Path to configuration file')
    parser.add_argument('--api', type=str, help='Collection service base URL (e.g. http://localhost:5000/api)')
    parser.add_argument('--api-key', type=str, help='API key for the collection service')
    parser.add_argument('--token', type=str,
                        help='Prebuilt basic-auth token; used instead of --api-key when given')
    parser.add_argument('--seed', type=int, help='Seed for guessing, for reproducible runs')
    parser.add_argument('--missing-id-policy', choices=MISSING_ID_POLICIES,
                        help='What to do with a question that has no id attribute')
    parser.add_argument('--verbose', action='store_true', default=None,
                        help='Log the full answer and question text maps')
    parser.add_argument('--no-upload', action='store_true', help='Do not send results to the service')
    parser.add_argument('--headful', action='store_true', help='Show the browser window')
    parser.add_argument('--start-selector', type=str, help='Button to click before questions appear')
    parser.add_argument('--submit-selector', type=str, help='Button to click once the answers are filled in')
    parser.add_argument('--keep-open', type=float, default=0,
                        help='Seconds to keep the browser open after the run')
    return parser


def load_config(args: argparse.Namespace) -> AgentConfig:
    config_file: Optional[str] = args.config
    if config_file == DEFAULT_PATHS['config_file'] and not os.path.exists(config_file):
        config_file = None

    config = AgentConfig(config_file)
    config.apply_overrides({
        'sync': {'base_url': args.api, 'api_key': args.api_key, 'token': args.token},
        'scraper': {
            'seed': args.seed,
            'missing_id_policy': args.missing_id_policy,
            'verbose': args.verbose,
        },
        'browser': {
            'headless': False if args.headful else None,
            'start_selector': args.start_selector,
            'submit_selector': args.submit_selector,
        },
    })
    return config


def build_credential(config: AgentConfig) -> Credential:
    if config.token:
        return Credential.from_token(config.token)
    return Credential.from_api_key(config.api_key)


def build_agent(config: AgentConfig, upload: bool = True) -> QuizAgent:
    client = SyncClient(
        build_credential(config),
        base_url=config.base_url,
        timeout=config.timeout,
    )
    return QuizAgent(
        client,
        resolver=AnswerResolver.seeded(config.seed),
        missing_id_policy=config.missing_id_policy,
        verbose=config.verbose,
        upload=upload,
    )


def print_summary(report: RunReport) -> None:
    print("\n" + "=" * 50)
    print("RUN SUMMARY")
    print("=" * 50)
    print(f"  Group: {report.model.group.text} ({report.model.group.code})")
    print(f"  Questions: {len(report.model.questions)}")
    print(f"  Known answers used: {report.resolution.known_count}")
    print(f"  Guessed: {len(report.resolution.unknown)}")
    print(f"  Known answers fetched: {'yes' if report.fetched else 'no'}")
    if report.uploaded is None:
        print("  Upload: skipped")
    else:
        print(f"  Upload: {'complete' if report.uploaded else 'failed'}")
    print("=" * 50)


async def run_on_page(agent: QuizAgent, page: BaseQuizPage) -> RunReport:
    report = await agent.run(page)
    print_summary(report)
    return report


async def submit_on_page(page: BaseQuizPage, selector: Optional[str]) -> bool:
    """Press the quiz's own submit button once the answers are filled in."""
    if not selector:
        return False
    if not await page.submit(selector):
        logging.getLogger(__name__).warning(f"No submit button matching {selector!r} - quiz left unsubmitted")
        return False
    return True


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except FileNotFoundError as e:
        print(f"Configuration file not found: {e}")
        return 1
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too
        print(f"Error in configuration: {e}")
        return 1

    setup_logging(config.settings)
    logger = logging.getLogger(__name__)
    agent = build_agent(config, upload=not args.no_upload)
    browser_settings = config.section('browser')

    try:
        if args.html:
            logger.info(f"Running offline against {args.html}")
            page = HtmlQuizPage.from_file(args.html)
            await run_on_page(agent, page)
            await submit_on_page(page, browser_settings['submit_selector'])
            return 0

        from quizsync.scraper.browser import BrowserSession
        async with BrowserSession(
            headless=browser_settings['headless'],
            navigation_timeout=browser_settings['navigation_timeout'],
        ) as session:
            page = await session.open_quiz(args.url, browser_settings['start_selector'])
            await run_on_page(agent, page)
            await submit_on_page(page, browser_settings['submit_selector'])
            if args.keep_open > 0:
                logger.info(f"Keeping browser open for {args.keep_open:.0f}s")
                await asyncio.sleep(args.keep_open)
        return 0

    except QuizSyncError as e:
        logger.error(f"Page does not match the expected quiz structure: {e}")
        logger.debug("Full error details:", exc_info=True)
        return 1
    except Exception as e:
        logger.error(f"Fatal error occurred during run: {e}")
        logger.error("Full error details:", exc_info=True)
        return 1


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    cli()
