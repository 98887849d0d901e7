# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry-versus-fatal classification for invocation failures."""

from __future__ import annotations

import logging
from enum import Enum

from .errors import ErrorCategory, ErrorKind, WebhookError, categorize_exception
from .models.result import STATUS_HALTED, STATUS_RETRY_REQUESTED, ActionOutcome

logger = logging.getLogger(__name__)


class Verdict(str, Enum):
    RETRY = "RETRY"
    FATAL = "FATAL"


FATAL_KINDS = frozenset(
    {
        ErrorKind.METHOD_REQUIRED,
        ErrorKind.NO_URL_SPECIFIED,
        ErrorKind.SUFFIX_WITHOUT_BASE,
        ErrorKind.HEADER_PARSE,
        ErrorKind.ACCEPTED_STATUS_CODES_PARSE,
        ErrorKind.MISSING_OAUTH2_CONFIG,
    }
)

RETRYABLE_MARKERS = (
    "ECONNREFUSED",
    "ETIMEDOUT",
    "ENOTFOUND",
    "fetch failed",
    "network",
    "Connection refused",
    "timed out",
)
FATAL_MARKERS = (
    "is required",
    "Failed to parse",
    "No URL specified",
    "no base address available",
)


def _verdict_for_webhook_error(error: WebhookError) -> Verdict:
    if error.kind in FATAL_KINDS:
        return Verdict.FATAL
    return Verdict.RETRY


def _verdict_for_message(message: str) -> Verdict:
    if any(marker in message for marker in RETRYABLE_MARKERS):
        return Verdict.RETRY
    if any(marker in message for marker in FATAL_MARKERS):
        return Verdict.FATAL
    return Verdict.RETRY


def verdict_for(error: BaseException) -> Verdict:
    """Decide whether `error` should be retried; unknown errors fail open toward retry."""
    if isinstance(error, WebhookError):
        return _verdict_for_webhook_error(error)
    if categorize_exception(error) is not ErrorCategory.UNKNOWN_ERROR:
        return Verdict.RETRY
    return _verdict_for_message(str(error))


def classify_error(error: BaseException) -> ActionOutcome:
    """Return a retry request, or re-raise `error` unchanged when it is fatal."""
    verdict = verdict_for(error)
    if verdict is Verdict.FATAL:
        logger.debug("Fatal webhook failure: %s", error)
        raise error
    logger.debug("Retryable webhook failure: %s", error)
    return ActionOutcome(status=STATUS_RETRY_REQUESTED)


def halt() -> ActionOutcome:
    """No resources outlive a request, so halting only reports the terminal status."""
    return ActionOutcome(status=STATUS_HALTED)


__all__ = ["FATAL_KINDS", "Verdict", "classify_error", "halt", "verdict_for"]
