"""
Core JWT decoding logic.

Splits a compact JWT on ``'.'``, base64url-decodes each section and returns
the header and body as JSON values plus the raw signature bytes.  Signature
verification is **not** performed: this is for inspection only.

Failures are reported as a two-level exception hierarchy.  A
``SectionError`` describes what went wrong inside one section and is wrapped
in an ``InvalidSectionError`` naming that section; a fourth fragment raises
``UnexpectedPartError``.
"""

from __future__ import annotations

import enum
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterator

from . import base64url

__all__ = [
    "Section",
    "Token",
    "SectionError",
    "MissingSectionError",
    "InvalidBase64Error",
    "InvalidUtf8Error",
    "InvalidJSONError",
    "TokenParseError",
    "InvalidSectionError",
    "UnexpectedPartError",
    "parse",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

class Section(enum.Enum):
    """Positional sections of a compact JWT."""

    HEADER = "Header"
    BODY = "Body"
    SIGNATURE = "Signature"


@dataclass(frozen=True)
class Token:
    """Holds the three decoded parts of a JWT token.

    ``header`` and ``body`` are arbitrary JSON values: encrypted or nested
    tokens may carry a string placeholder instead of an object.
    """

    header: Any
    body: Any
    signature: bytes

    @classmethod
    def from_string(cls, token: str | bytes) -> Token:
        """Alternate spelling of :func:`parse`."""
        return parse(token)

    @property
    def algorithm(self) -> str | None:
        """The ``alg`` header field, if the header is an object carrying one."""
        if isinstance(self.header, dict):
            alg = self.header.get("alg")
            if isinstance(alg, str):
                return alg
        return None

    def to_dict(self) -> dict[str, Any]:
        """Header and body under the fixed keys ``header`` and ``claims``."""
        return {"header": self.header, "claims": self.body}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class SectionError(Exception):
    """Raised when a single token section cannot be decoded."""


class MissingSectionError(SectionError):
    def __init__(self) -> None:
        super().__init__("Missing token section")


class InvalidBase64Error(SectionError):
    def __init__(self, error: base64url.Base64Error) -> None:
        self.error = error
        super().__init__(f"Base64 error, {error}")


class InvalidUtf8Error(SectionError):
    def __init__(self, error: UnicodeDecodeError) -> None:
        self.error = error
        super().__init__(f"UTF8 error, {error}")


class InvalidJSONError(SectionError):
    def __init__(self, error: ValueError | RecursionError) -> None:
        self.error = error
        super().__init__(f"JSON error, {error}")


class TokenParseError(Exception):
    """Raised when a JWT token cannot be parsed."""


class InvalidSectionError(TokenParseError):
    """A section failed to decode; ``cause`` says why."""

    def __init__(self, section: Section, cause: SectionError) -> None:
        self.section = section
        self.cause = cause
        super().__init__(f"Invalid {section.value}: {cause}")


class UnexpectedPartError(TokenParseError):
    """A fourth fragment follows the signature."""

    def __init__(self) -> None:
        super().__init__("Error: Unexpected fragment after signature")


# ---------------------------------------------------------------------------
# Section decoding
# ---------------------------------------------------------------------------

def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name!r}")


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def _decode_bytes(segment: str | bytes | None) -> bytes:
    if segment is None:
        raise MissingSectionError()
    try:
        return base64url.decode(segment)
    except base64url.Base64Error as exc:
        raise InvalidBase64Error(exc) from exc


def _decode_json(segment: str | bytes | None) -> Any:
    raw = _decode_bytes(segment)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Error(exc) from exc
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)
    except (ValueError, RecursionError) as exc:
        raise InvalidJSONError(exc) from exc


def _decode_section(section: Section, parts: Iterator) -> Any:
    segment = next(parts, None)
    try:
        if section is Section.SIGNATURE:
            return _decode_bytes(segment)
        return _decode_json(segment)
    except SectionError as exc:
        logger.debug("%s section rejected: %s", section.value, exc)
        raise InvalidSectionError(section, exc) from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse(token: str | bytes) -> Token:
    """
    Decode a JWT token string into its three components.

    Sections are processed left to right (header, body, signature) and the
    first failure is raised.  A fragment after the signature is only
    detected once all three sections decoded cleanly.

    Raises:
        InvalidSectionError: If a section is missing or cannot be decoded.
        UnexpectedPartError: If the token has more than three sections.
    """
    separator = "." if isinstance(token, str) else b"."
    parts = iter(token.split(separator))

    header = _decode_section(Section.HEADER, parts)
    body = _decode_section(Section.BODY, parts)
    signature = _decode_section(Section.SIGNATURE, parts)

    if next(parts, None) is not None:
        raise UnexpectedPartError()

    decoded = Token(header=header, body=body, signature=signature)
    logger.debug("Parsed token (alg=%r, %d signature bytes)", decoded.algorithm, len(signature))
    return decoded
