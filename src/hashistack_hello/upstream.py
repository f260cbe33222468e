"""
Best-effort HTTP GET against the Consul and Vault agents.

Every failure is returned as an UpstreamError value instead of being raised,
so a handler can report it alongside whatever else succeeded.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Union

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class UpstreamBody:
    body: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class UpstreamError:
    message: str

    @property
    def ok(self) -> bool:
        return False


UpstreamResult = Union[UpstreamBody, UpstreamError]


class UpstreamClient:
    """
    Thin wrapper over ``requests.get``.

    No Session is kept, so one instance can be shared by every worker thread.
    One attempt per call, no retries.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout = timeout

    def get(self, url: str, headers: Mapping[str, str] | None = None) -> UpstreamResult:
        """Fetch ``url`` and return its raw body, or the failure message."""
        try:
            response = requests.get(url, headers=dict(headers or {}), timeout=self.timeout)
            response.raise_for_status()
            return UpstreamBody(response.text)
        except (requests.RequestException, UnicodeError) as e:
            logger.warning("GET %s failed: %s", url, e)
            return UpstreamError(str(e) or type(e).__name__)
