"""Failure classification shared by the use-case handlers."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from orderflow.domain.exceptions import DomainException, ServerError


@contextmanager
def classified_failures(logger: logging.Logger, action: str) -> Iterator[None]:
    """Let domain errors through; log anything else and raise ServerError.

    Client-side problems (validation, not found, out of stock) are logged
    as warnings.  Unexpected failures are logged with their traceback and
    surfaced with a generic message so internals never leak to callers.
    """
    try:
        yield
    except DomainException as exc:
        logger.warning("%s rejected (%s): %s", action, exc.kind, exc)
        raise
    except Exception as exc:
        logger.exception("Unexpected failure during %s", action)
        raise ServerError(f"Unable to {action}, please try again later") from exc
