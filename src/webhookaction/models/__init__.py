# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed models for invocation inputs, requests and results."""

from .params import ENV_ADDRESS, AuthContext, WebhookParams
from .request import BODY_METHODS, InputKind, RawInput, RequestSpec
from .result import (
    STATUS_HALTED,
    STATUS_RETRY_REQUESTED,
    STATUS_SUCCESS,
    ActionOutcome,
    ExecutionResult,
    WebhookResult,
    utc_timestamp,
)

__all__ = [
    "BODY_METHODS",
    "ENV_ADDRESS",
    "STATUS_HALTED",
    "STATUS_RETRY_REQUESTED",
    "STATUS_SUCCESS",
    "ActionOutcome",
    "AuthContext",
    "ExecutionResult",
    "InputKind",
    "RawInput",
    "RequestSpec",
    "WebhookParams",
    "WebhookResult",
    "utc_timestamp",
]
