"""Collect every inline schema in an OpenAPI document into one catalogue.

Walks component schemas, component responses, component request bodies and
each operation of each path item. Inline schemas are inserted under their
own (components) or synthesized (responses, request bodies) name; anything
given as a $ref is left for the type resolver and is not duplicated here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .errors import NameCollisionError
from .loader import get_components, get_paths, is_reference
from .naming import request_body_name, response_name

logger = logging.getLogger(__name__)

# Path item operation keys, in visiting order
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@dataclass(frozen=True)
class NamedSchema:
    """A catalogue entry: a unique name and the inline schema it labels."""

    name: str
    schema: dict[str, Any]


class _Catalogue:
    def __init__(self) -> None:
        self._schemas: dict[str, dict[str, Any]] = {}

    def add(self, name: str, schema: dict[str, Any]) -> None:
        if name in self._schemas:
            raise NameCollisionError("schema", name)
        self._schemas[name] = schema

    def entries(self) -> list[NamedSchema]:
        return [NamedSchema(name, self._schemas[name]) for name in sorted(self._schemas)]


def _gather_from_schemas(catalogue: _Catalogue, schemas: dict[str, Any]) -> None:
    for name, schema in schemas.items():
        # Reference-only components are dropped
        if is_reference(schema):
            continue
        catalogue.add(str(name), schema)


def _from_content(
    catalogue: _Catalogue,
    content: dict[str, Any] | None,
    name_for: Callable[[str], str],
) -> None:
    for media_type, media in (content or {}).items():
        name = name_for(media_type)
        schema = (media or {}).get("schema")
        if schema is None or is_reference(schema):
            continue
        catalogue.add(name, schema)


def _gather_from_responses(catalogue: _Catalogue, responses: dict[str, Any]) -> None:
    for name, response in responses.items():
        if is_reference(response):
            continue
        _from_content(
            catalogue,
            (response or {}).get("content"),
            lambda mt, name=name: response_name(str(name), None, None, False, mt),
        )


def _gather_from_bodies(catalogue: _Catalogue, bodies: dict[str, Any]) -> None:
    for name, body in bodies.items():
        if is_reference(body):
            continue
        _from_content(
            catalogue,
            (body or {}).get("content"),
            lambda mt, name=name: request_body_name(str(name), None, mt),
        )


def _from_operation(
    catalogue: _Catalogue, path: str, method: str, operation: dict[str, Any]
) -> None:
    body = operation.get("requestBody")
    if body and not is_reference(body):
        _from_content(
            catalogue,
            body.get("content"),
            lambda mt: request_body_name(path, method, mt),
        )

    responses = operation.get("responses") or {}
    default = responses.get("default")
    if default and not is_reference(default):
        _from_content(
            catalogue,
            default.get("content"),
            lambda mt: response_name(path, method, None, True, mt),
        )

    for status_code, response in responses.items():
        status = str(status_code)
        if status == "default" or not response or is_reference(response):
            continue
        _from_content(
            catalogue,
            response.get("content"),
            lambda mt, status=status: response_name(path, method, status, False, mt),
        )


def _gather_from_paths(catalogue: _Catalogue, paths: dict[str, Any]) -> None:
    for path, path_item in paths.items():
        if not path_item or is_reference(path_item):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if operation:
                _from_operation(catalogue, str(path), method, operation)


def collect_schemas(spec: dict[str, Any]) -> list[NamedSchema]:
    """Build the name-ordered catalogue of inline schemas in the document."""
    catalogue = _Catalogue()
    components = get_components(spec)
    _gather_from_schemas(catalogue, components.get("schemas") or {})
    _gather_from_responses(catalogue, components.get("responses") or {})
    _gather_from_bodies(catalogue, components.get("requestBodies") or {})
    _gather_from_paths(catalogue, get_paths(spec))

    entries = catalogue.entries()
    logger.debug("Collected %d schemas", len(entries))
    return entries
