# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from webhookaction.errors import AcceptedStatusCodesParseError, HeaderParseError
from webhookaction.models import InputKind, RawInput, WebhookParams
from webhookaction.normalize import (
    build_request_spec,
    normalize_accepted_status_codes,
    normalize_headers,
    serialize_body,
)


def test_raw_input_tags_each_shape():
    assert RawInput.of(None).kind is InputKind.ABSENT
    assert RawInput.of("").kind is InputKind.ABSENT
    assert RawInput.of("{}").kind is InputKind.TEXT
    assert RawInput.of({"a": 1}).kind is InputKind.STRUCTURED


def test_normalize_headers_from_json_string():
    assert normalize_headers('{"X-Custom-Header":"value"}') == {"X-Custom-Header": "value"}


def test_normalize_headers_rejects_invalid_json():
    with pytest.raises(HeaderParseError) as excinfo:
        normalize_headers("not json")
    assert str(excinfo.value).startswith("Failed to parse requestHeaders: ")


def test_normalize_headers_rejects_non_object_json():
    with pytest.raises(HeaderParseError):
        normalize_headers("[1, 2]")


def test_normalize_headers_copies_structured_mapping():
    original = {"X-Test": "1"}
    headers = normalize_headers(original)
    headers["Content-Type"] = "application/json"
    assert original == {"X-Test": "1"}


def test_serialize_body_passes_strings_through():
    assert serialize_body('{"name": "John Doe"}') == '{"name": "John Doe"}'
    assert serialize_body(None) is None


def test_serialize_body_compact_json_keeps_key_order():
    body = {"zeta": 1, "alpha": {"nested": [1, 2]}, "name": "Zoë"}
    text = serialize_body(body)
    assert text == '{"zeta":1,"alpha":{"nested":[1,2]},"name":"Zoë"}'
    assert json.loads(text) == body


def test_accepted_status_codes_shapes():
    assert normalize_accepted_status_codes(None) == ()
    assert normalize_accepted_status_codes([404, 409]) == (404, 409)
    assert normalize_accepted_status_codes("[404, 409]") == (404, 409)


@pytest.mark.parametrize("raw", ["not json", '{"a": 1}', '["404"]', "[true]"])
def test_accepted_status_codes_rejects_bad_values(raw):
    with pytest.raises(AcceptedStatusCodesParseError) as excinfo:
        normalize_accepted_status_codes(raw)
    assert "Failed to parse acceptedStatusCodes" in str(excinfo.value)


@pytest.mark.parametrize("method", ["get", "HEAD", "options"])
def test_build_request_spec_drops_body_for_bodyless_methods(method):
    params = WebhookParams(method=method, request_body={"ignored": True})
    spec = build_request_spec(params, "https://api.example.com")
    assert spec.method == method.upper()
    assert spec.body is None
    assert not spec.carries_body
    assert "Content-Type" not in spec.headers


@pytest.mark.parametrize("method", ["post", "PUT", "Patch", "DELETE"])
def test_build_request_spec_attaches_body_and_content_type(method):
    params = WebhookParams(method=method, request_body={"a": 1})
    spec = build_request_spec(params, "https://api.example.com")
    assert spec.body == '{"a":1}'
    assert spec.headers["Content-Type"] == "application/json"


def test_build_request_spec_keeps_caller_content_type_and_user_agent():
    params = WebhookParams(
        method="POST",
        request_body="a=1",
        request_headers={"content-type": "application/x-www-form-urlencoded", "user-agent": "Custom/1"},
    )
    spec = build_request_spec(params, "https://api.example.com", user_agent="WebhookAction/test")
    assert spec.headers == {"content-type": "application/x-www-form-urlencoded", "user-agent": "Custom/1"}


def test_build_request_spec_injects_user_agent_when_missing():
    spec = build_request_spec(WebhookParams(method="GET"), "https://api.example.com", user_agent="UA/1.0")
    assert spec.headers == {"User-Agent": "UA/1.0"}


def test_request_spec_success_policy():
    spec = build_request_spec(WebhookParams(method="GET", accepted_status_codes=[404]), "https://x")
    assert spec.is_success(200)
    assert spec.is_success(299)
    assert spec.is_success(404)
    assert not spec.is_success(300)
    assert not spec.is_success(500)
