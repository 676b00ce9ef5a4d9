"""Unit tests for response encoding and the shared error responses."""

from __future__ import annotations

import dataclasses
import json

import pytest

from cloudapi_double.core import responses


def test_header_items_sets_content_type_extra_headers_and_length():
    resp = responses.Response(200, b"hello", "text/plain", headers=(("X-Api-Version", "7.2.0"),))

    assert resp.header_items() == [
        ("Content-Type", "text/plain"),
        ("X-Api-Version", "7.2.0"),
        ("Content-Length", "5"),
    ]


def test_header_items_omits_empty_content_type():
    assert responses.Response(204).header_items() == [("Content-Length", "0")]


def test_content_length_counts_body_bytes():
    resp = responses.Response(200, "ñ".encode("utf-8"))

    assert dict(resp.header_items())["Content-Length"] == "2"


def test_json_response_encodes_value_with_json_content_type():
    resp = responses.json_response(201, {"name": "k1"})

    assert resp.status == 201
    assert resp.content_type == "application/json"
    assert json.loads(resp.body) == {"name": "k1"}


@pytest.mark.parametrize(
    "resp, status, text",
    [
        (responses.NOT_ALLOWED, 405, "MethodNotAllowedError"),
        (responses.NOT_FOUND, 404, "NotFoundError"),
        (responses.BAD_REQUEST, 400, "BadRequestError"),
    ],
)
def test_shared_error_responses(resp, status, text):
    assert resp.status == status
    assert resp.error_text == text
    assert resp.content_type == responses.TEXT_PLAIN
    assert resp.body


def test_shared_error_responses_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        responses.NOT_FOUND.headers = (("X-Leak", "1"),)


def test_internal_error_keeps_diagnostic_text_out_of_the_body():
    resp = responses.internal_error(KeyError("Machine m-1 not found"))

    assert resp.status == 500
    assert resp.content_type == "application/json"
    assert "Machine m-1 not found" in resp.error_text
    assert resp.json() == {"internalServerError": {"message": "Unknown Error", "code": 500}}


def test_json_response_none_renders_empty_body():
    resp = responses.json_response(202, None)

    assert resp.status == 202
    assert resp.body == b""
    assert resp.content_type == ""


def test_json_response_raises_on_unserializable_value():
    with pytest.raises(TypeError):
        responses.json_response(200, {"bad": object()})


def test_dispatch_error_message_names_method_and_path():
    err = responses.DispatchError("PATCH", "/tester/keys")

    assert str(err) == 'unknown request method "PATCH" for /tester/keys'
