"""External alerting targets for overflow messages."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import requests

from overflow_signalizer.core.config import AppSettings
from overflow_signalizer.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Signalizer(Protocol):
    def signalize(self, message: str) -> None: ...


class WebhookSignalizer:
    """Post overflow messages to an incoming-webhook URL (Slack, Mattermost, ...)."""

    def __init__(self, url: str, *, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout

    def signalize(self, message: str) -> None:
        response = requests.post(self.url, json={"text": message}, timeout=self.timeout)
        response.raise_for_status()
        logger.info("signalizer.webhook.delivered", status_code=response.status_code)


def build_signalizer(settings: AppSettings) -> Signalizer | None:
    if not settings.signalizer_webhook_url:
        return None
    return WebhookSignalizer(settings.signalizer_webhook_url, timeout=settings.signalizer_timeout)
