# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Transport seam for the action.

An HttpClient sends one request and never retries. It reports outcomes through
HttpResponse instead of raising:

- `ok=False` (and `status_code=None`) means no response arrived at all, e.g. a refused
  connection, DNS failure or timeout; `error_message`/`error_type` describe why.
- any received response, 2xx or not, is `ok=True` with its status code; deciding whether
  the status counts as success belongs to the executor.
"""

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """
    Build the httpx-backed client for one action.

    Settings are read from `WEBHOOKACTION_*` environment variables when not supplied, so
    every new client picks up the current timeout, TLS and redirect policy.
    """
    from .httpx_client import HttpxClient

    return HttpxClient(settings if settings is not None else load_http_settings())
