# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Canonical request model and the flexible input shapes it is built from."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class InputKind(str, Enum):
    ABSENT = "absent"
    TEXT = "text"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class RawInput:
    """A parameter that may arrive as JSON text or as an already-decoded value."""

    kind: InputKind
    value: Any = None

    @classmethod
    def of(cls, value: Any) -> RawInput:
        # Empty strings and empty containers mean "not supplied".
        if value is None or value == "" or value == {} or value == []:
            return cls(InputKind.ABSENT)
        if isinstance(value, str):
            return cls(InputKind.TEXT, value)
        return cls(InputKind.STRUCTURED, value)


@dataclass
class RequestSpec:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    accepted_status_codes: tuple[int, ...] = ()

    @property
    def carries_body(self) -> bool:
        return self.body is not None and self.method in BODY_METHODS

    def is_success(self, status_code: int) -> bool:
        return 200 <= status_code < 300 or status_code in self.accepted_status_codes
