"""
Shared fixtures for jwtinfo tests.

Tokens are built with PyJWT so that the decoder is checked against a real
encoder rather than hand-written strings.
"""

import json
import logging

import jwt
import pytest
from jwt.utils import base64url_encode

from jwtinfo import config

# HS256 token with body {"foo": "bar"}.
TEST_JWT = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJmb28iOiJiYXIifQ"
    ".dtxWM6MIcgoeMgH87tGvsNDY6cHWL6MGW4LeYvnm1JA"
)

TEST_SECRET = "a-string-secret-at-least-256-bits-long"


def encode_section(value) -> str:
    """base64url-encode the JSON form of *value*, unpadded."""
    return base64url_encode(json.dumps(value).encode("utf-8")).decode("ascii")


def make_token(header, body, signature: bytes = b"sig") -> str:
    """Assemble a compact token from arbitrary JSON header/body values."""
    return ".".join([
        encode_section(header),
        encode_section(body),
        base64url_encode(signature).decode("ascii"),
    ])


@pytest.fixture
def claims():
    return {"sub": "1234567890", "name": "John Doe", "iat": 1516239022}


@pytest.fixture
def signed_token(claims):
    """An HS256 token signed by PyJWT."""
    return jwt.encode(claims, TEST_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the user's real config file and environment out of the tests."""
    monkeypatch.delenv(config.ENV_CONFIG, raising=False)
    monkeypatch.delenv(config.ENV_PRETTY, raising=False)
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", str(tmp_path / "missing" / "config.yaml"))


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    """setup_logging() clears root handlers; give it a scratch list to clear."""
    root = logging.getLogger()
    level = root.level
    monkeypatch.setattr(root, "handlers", [])
    yield
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.setLevel(level)
