"""Naming rules for catalogue entries and emitted Rust identifiers.

Synthesized schema names:
  response      <Entity><Method><StatusCode><MediaSubtype>Response[Default]
  request body  <Entity><Method><MediaSubtype>RequestBody

Entity is used verbatim (component name or path template); method and media
subtype are UpperCamelCased. Examples:
  "/pets/{id}", get, default, application/json -> /pets/{id}GetJsonResponseDefault
  "/pets", post, application/json             -> /petsPostJsonRequestBody
  component response "NotFound", text/plain  -> NotFoundPlainResponse
"""

from __future__ import annotations

import re

from .errors import InvalidMediaTypeError, UnsupportedSchemaError

# Runs of Unicode letters and digits
_RUN_RE = re.compile(r"[^\W_]+")

RUST_KEYWORDS = frozenset({
    "as", "async", "await", "break", "const", "continue", "crate", "dyn",
    "else", "enum", "extern", "false", "fn", "for", "gen", "if", "impl", "in",
    "let", "loop", "match", "mod", "move", "mut", "pub", "ref", "return",
    "self", "static", "struct", "super", "trait", "true", "try", "type",
    "unsafe", "use", "where", "while", "abstract", "become", "box", "do",
    "final", "macro", "override", "priv", "typeof", "unsized", "virtual",
    "yield",
})

# Keywords that cannot be written as raw identifiers
_NON_RAW_KEYWORDS = frozenset({"crate", "self", "super"})


def _split_case(run: str) -> list[str]:
    words: list[str] = []
    start = 0
    for i in range(1, len(run)):
        prev, cur = run[i - 1], run[i]
        if not cur.isupper():
            continue
        # petId | v2Beta | HTTPServer
        next_lower = i + 1 < len(run) and run[i + 1].islower()
        if not prev.isupper() or next_lower:
            words.append(run[start:i])
            start = i
    words.append(run[start:])
    return words


def split_words(text: str) -> list[str]:
    """Split text into words on separators and case boundaries."""
    words: list[str] = []
    for run in _RUN_RE.findall(text):
        words.extend(_split_case(run))
    return words


def to_upper_camel_case(text: str) -> str:
    """Convert arbitrary text to UpperCamelCase."""
    return "".join(word[0].upper() + word[1:].lower() for word in split_words(text))


def to_snake_case(text: str) -> str:
    """Convert camelCase, PascalCase or separated text to snake_case."""
    return "_".join(word.lower() for word in split_words(text))


def media_subtype(media_type: str) -> str:
    """Return the part of a MIME type after the '/'."""
    parts = media_type.split("/")
    if len(parts) < 2:
        raise InvalidMediaTypeError(media_type)
    return parts[1]


def response_name(
    entity: str,
    method: str | None,
    status_code: str | None,
    is_default: bool,
    media_type: str,
) -> str:
    """Build the catalogue name for an inline response schema."""
    return "{}{}{}{}Response{}".format(
        entity,
        to_upper_camel_case(method or ""),
        status_code or "",
        to_upper_camel_case(media_subtype(media_type)),
        "Default" if is_default else "",
    )


def request_body_name(entity: str, method: str | None, media_type: str) -> str:
    """Build the catalogue name for an inline request body schema."""
    return "{}{}{}RequestBody".format(
        entity,
        to_upper_camel_case(method or ""),
        to_upper_camel_case(media_subtype(media_type)),
    )


def _identifier(ident: str, name: str, owner: str | None) -> str:
    if ident and ident[0].isdigit():
        ident = "_" + ident
    if not ident.isidentifier():
        raise UnsupportedSchemaError(owner or name, f"name {name!r} has no identifier characters")
    return ident


def type_name(name: str) -> str:
    """Convert a catalogue name to a Rust type identifier."""
    return _identifier(to_upper_camel_case(name), name, None)


def field_name(name: str, owner: str | None = None) -> str:
    """Convert a property name to a Rust field identifier.

    Keywords become raw identifiers (r#type); the few keywords Rust refuses
    as raw identifiers get a trailing underscore instead.
    """
    ident = _identifier(to_snake_case(name), name, owner)
    if ident in _NON_RAW_KEYWORDS:
        return ident + "_"
    if ident in RUST_KEYWORDS:
        return "r#" + ident
    return ident
