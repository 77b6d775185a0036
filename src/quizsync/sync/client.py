"""
Collection service client.

Two calls make up the protocol: fetch the known answers before resolution,
then upload the run's payload after the page has been filled in. Network
failures on either call are logged and reported through the return value;
they never abort the run.
"""

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from quizsync.constants import DEFAULT_BASE_URL, ENDPOINTS, UPLOAD_CONTENT_TYPE
from quizsync.models import AnswerCache


@dataclass(frozen=True)
class Credential:
    """
    Basic-auth credential for the collection service.

    The service identifies callers by the basic-auth user id, so an API key
    is sent as "<key>:" with an empty password.
    """

    authorization: str = field(repr=False)

    @classmethod
    def from_api_key(cls, api_key: str) -> "Credential":
        token = base64.b64encode(f"{api_key}:".encode('utf-8')).decode('ascii')
        return cls(f"Basic {token}")

    @classmethod
    def from_token(cls, token: str) -> "Credential":
        """Wrap an already base64-encoded basic-auth token."""
        return cls(f"Basic {token}")


class SyncClient:
    def __init__(self, credential: Credential, base_url: str = DEFAULT_BASE_URL,
                 session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers['Authorization'] = credential.authorization

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}{ENDPOINTS[endpoint]}"

    def _is_success(self, response) -> bool:
        return 200 <= response.status_code < 300

    def _log_http_error(self, action: str, response) -> None:
        self.logger.error(
            f"{action} failed: Error {response.status_code} {response.reason} {response.text}"
        )

    def fetch_known_answers(self, cache: AnswerCache) -> bool:
        """
        Merge the service's known answers into cache.

        Returns False, leaving cache untouched, on a transport error or a
        non-2xx status. A body that is not JSON raises.
        """
        url = self._url('data')
        self.logger.info(f"Fetching known answers from {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Fetching known answers failed: {e}")
            return False

        if not self._is_success(response):
            self._log_http_error("Fetching known answers", response)
            return False

        data = response.json()
        known = {int(question_id): int(answer_id) for question_id, answer_id in data.items()}
        cache.update(known)
        self.logger.info(f"Received {len(known)} known answers")
        return True

    def submit_results(self, payload: Dict[str, Any]) -> bool:
        """Upload a run payload. Never retries and never raises for network errors."""
        url = self._url('upload')
        self.logger.info(f"Uploading results to {url}")
        try:
            response = self.session.post(
                url,
                data=json.dumps(payload),
                headers={'Content-Type': UPLOAD_CONTENT_TYPE},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.logger.error(f"Upload failed: {e}")
            return False

        if not self._is_success(response):
            self._log_http_error("Upload", response)
            return False

        self.logger.info("Upload complete")
        return True
