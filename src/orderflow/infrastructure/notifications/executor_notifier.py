"""Post-commit notifier backed by a small thread pool.

``submit`` only queues the e-mail; delivery runs on a worker thread and
its outcome is logged, never reported back to the caller.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from orderflow.application.notifications import (
    EmailNotification,
    EmailSender,
    MailResult,
    PostCommitNotifier,
)

logger = logging.getLogger(__name__)


class ExecutorNotifier(PostCommitNotifier):

    def __init__(self, sender: EmailSender, max_workers: int = 2) -> None:
        self._sender = sender
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="orderflow-mail"
        )

    def submit(self, notification: EmailNotification) -> None:
        future = self._executor.submit(
            self._sender.send_mail, notification.to, notification.subject, notification.html
        )
        future.add_done_callback(lambda f: self._report(notification, f))

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; with *wait*, deliver what is already queued."""
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _report(notification: EmailNotification, future: Future) -> None:
        try:
            result: MailResult = future.result()
        except Exception:
            logger.exception("E-mail %r to %s crashed", notification.subject, notification.to)
            return
        if not result.ok:
            logger.warning(
                "E-mail %r to %s was not delivered: %s",
                notification.subject, notification.to, result.error,
            )
