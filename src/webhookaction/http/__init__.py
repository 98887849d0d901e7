# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import find_header, has_header, header_value, set_default_header
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import compose_url, join_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "compose_url",
    "create_default_http_client",
    "find_header",
    "has_header",
    "header_value",
    "join_url",
    "set_default_header",
]
