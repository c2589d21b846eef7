"""Tests for jwtinfo.formatters"""

import json

import pytest

from jwtinfo.decoder import parse
from jwtinfo.formatters import render_json, render_token, select_part

from conftest import TEST_JWT, make_token


def test_body_compact():
    assert render_token(parse(TEST_JWT)) == '{"foo":"bar"}'


def test_header_compact_sorted():
    assert render_token(parse(TEST_JWT), "header") == '{"alg":"HS256","typ":"JWT"}'


def test_full_compact():
    assert render_token(parse(TEST_JWT), "full") == (
        '{"claims":{"foo":"bar"},"header":{"alg":"HS256","typ":"JWT"}}'
    )


def test_full_pretty():
    text = render_token(parse(TEST_JWT), "full", pretty=True)
    assert '"header": {' in text
    assert '"claims": {' in text
    assert '"alg": "HS256"' in text
    assert json.loads(text) == {
        "header": {"alg": "HS256", "typ": "JWT"},
        "claims": {"foo": "bar"},
    }


def test_pretty_indent_width():
    assert render_json({"foo": "bar"}, pretty=True, indent=4) == '{\n    "foo": "bar"\n}'


def test_unsorted_keeps_token_order():
    token = parse(make_token({"typ": "JWT", "alg": "HS256"}, {}))
    assert render_token(token, "header", sort_keys=False) == '{"typ":"JWT","alg":"HS256"}'


def test_non_ascii_is_not_escaped():
    token = parse(make_token({}, {"name": "Zoë"}))
    assert render_token(token) == '{"name":"Zoë"}'


def test_non_object_parts_render():
    token = parse(make_token("<encrypted JWE body>", "<encrypted JWE body>"))
    assert render_token(token, "header") == '"<encrypted JWE body>"'
    assert render_token(token, "full") == (
        '{"claims":"<encrypted JWE body>","header":"<encrypted JWE body>"}'
    )


def test_unknown_part():
    with pytest.raises(ValueError, match="Unknown token part"):
        select_part(parse(TEST_JWT), "signature")


def test_non_finite_numbers_are_not_rendered():
    with pytest.raises(ValueError):
        render_json({"exp": float("inf")})
    with pytest.raises(ValueError):
        render_json(float("nan"), pretty=True)
