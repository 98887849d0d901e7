# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Invocation result models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def utc_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-01T00:00:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ExecutionResult:
    status_code: int
    body: str
    success: bool


@dataclass(frozen=True)
class WebhookResult:
    status_code: int
    body: str
    success: bool
    executed_at: str

    @classmethod
    def from_execution(cls, execution: ExecutionResult, executed_at: str | None = None) -> WebhookResult:
        return cls(
            status_code=execution.status_code,
            body=execution.body,
            success=execution.success,
            executed_at=executed_at or utc_timestamp(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "body": self.body,
            "success": self.success,
            "executedAt": self.executed_at,
        }


STATUS_SUCCESS = "success"
STATUS_RETRY_REQUESTED = "retry_requested"
STATUS_HALTED = "halted"


@dataclass(frozen=True)
class ActionOutcome:
    """Envelope returned across the framework boundary."""

    status: str
    data: WebhookResult | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"status": self.status}
        if self.data is not None:
            out["data"] = self.data.to_dict()
        return out
