"""Reading and normalizing task parameters.

Parameters arrive as one JSON document on standard input. Every mapping key,
at any depth, is interned so the tree holds one canonical object per key
text. Key text is never changed; `identifier_key` gives the Python name a key
binds to when a task declares keyword parameters.
"""

from __future__ import annotations

import json
import keyword
import logging
import sys
from typing import Any, TextIO

from task_helper.errors import ParseError

logger = logging.getLogger(__name__)


def normalize_key(key: str) -> str:
    """Return the canonical (interned) form of a mapping key."""

    return sys.intern(str(key))


def identifier_key(key: str) -> str:
    """Return the keyword-argument name a key binds to.

    `"remote-transport"` binds to `remote_transport`, `"1st"` to `_1st` and
    `"class"` to `class_`. Identifiers are returned as is.
    """

    if key.isidentifier() and not keyword.iskeyword(key):
        return key

    out = "".join(ch if ("_" + ch).isidentifier() else "_" for ch in key)
    if not out[:1].isidentifier():
        out = "_" + out
    if keyword.iskeyword(out):
        out += "_"
    return out


def normalize_keys(value: Any) -> Any:
    """Recursively normalize the keys of a decoded JSON value.

    Returns new containers with the same keys, in the same order; scalars are
    returned unchanged.
    """

    if isinstance(value, dict):
        return {normalize_key(k): normalize_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_keys(item) for item in value]
    return value


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Invalid JSON on standard input: {name} is not a JSON value")


def parse_params(raw: str) -> Any:
    """Decode one JSON document and normalize it."""

    if not raw.strip():
        raise ParseError("No parameters were provided on standard input")

    try:
        decoded = json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Invalid JSON on standard input: {e.msg}",
            details={"line": e.lineno, "column": e.colno},
        ) from e
    except RecursionError as e:
        raise ParseError("Invalid JSON on standard input: nesting is too deep") from e

    if not isinstance(decoded, dict):
        raise ParseError(
            "Parameters must be a JSON object",
            details={"type": type(decoded).__name__},
        )

    try:
        return normalize_keys(decoded)
    except RecursionError as e:
        raise ParseError("Invalid JSON on standard input: nesting is too deep") from e


def read_params(stream: TextIO | None = None) -> Any:
    """Read the whole input stream once and return the Parameter Tree."""

    stream = sys.stdin if stream is None else stream
    try:
        raw = stream.read()
    except UnicodeDecodeError as e:
        raise ParseError(
            f"Standard input is not valid {e.encoding}",
            details={"position": e.start},
        ) from e
    logger.debug("Read parameters", extra={"size": len(raw)})
    return parse_params(raw)
