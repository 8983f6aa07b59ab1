"""Generator options: derives, imports and decorations.

Options may be built in code or loaded from a YAML file:

    derives: [Clone, Serialize, Deserialize]
    imports:
      - serde::Serialize
      - [serde, Deserialize]
    annotations_before:
      - serde_with::skip_serializing_none
    annotations_after:
      - attribute: serde(rename_all = "camelCase")
        except: [RawPayload]
    field_annotations: []
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

BASE_DERIVES: tuple[str, ...] = ("Debug",)

_KNOWN_KEYS = {"derives", "imports", "annotations_before", "annotations_after", "field_annotations"}


def _unwrap_attribute(text: str) -> str:
    text = text.strip()
    if text.startswith("#[") and text.endswith("]"):
        text = text[2:-1].strip()
    return text


@dataclass(frozen=True)
class Decoration:
    """An attribute applied to every schema except those listed."""

    attribute: str
    exceptions: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if isinstance(self.exceptions, str):
            raise ConfigurationError(f"Exceptions for {self.attribute!r} must be a collection of schema names.")
        object.__setattr__(self, "attribute", _unwrap_attribute(self.attribute))
        object.__setattr__(self, "exceptions", frozenset(self.exceptions))

    def applies_to(self, schema_name: str) -> bool:
        return schema_name not in self.exceptions


def _decorations(entries: Iterable[Decoration | str]) -> tuple[Decoration, ...]:
    return tuple(e if isinstance(e, Decoration) else Decoration(e) for e in entries)


@dataclass(frozen=True)
class GeneratorOptions:
    derives: tuple[str, ...] = ()
    imports: tuple[tuple[str, str], ...] = ()
    annotations_before: tuple[Decoration, ...] = ()
    annotations_after: tuple[Decoration, ...] = ()
    field_annotations: tuple[Decoration, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.derives, str) or isinstance(self.imports, str):
            raise ConfigurationError("derives and imports must be collections, not a single string.")
        object.__setattr__(self, "derives", tuple(self.derives))
        object.__setattr__(self, "imports", tuple(parse_import(i) for i in self.imports))
        object.__setattr__(self, "annotations_before", _decorations(self.annotations_before))
        object.__setattr__(self, "annotations_after", _decorations(self.annotations_after))
        object.__setattr__(self, "field_annotations", _decorations(self.field_annotations))

    def all_derives(self) -> tuple[str, ...]:
        """Base derives followed by the extras, without repeats."""
        seen: list[str] = []
        for name in BASE_DERIVES + self.derives:
            if name not in seen:
                seen.append(name)
        return tuple(seen)

    def with_derives(self, *names: str) -> GeneratorOptions:
        return replace(self, derives=self.derives + names)

    def with_imports(self, *imports: tuple[str, str]) -> GeneratorOptions:
        return replace(self, imports=self.imports + tuple(imports))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GeneratorOptions:
        """Build options from a parsed config mapping."""
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown option keys: {', '.join(sorted(unknown))}")
        return cls(
            derives=tuple(_parse_names(data.get("derives"), "derives")),
            imports=tuple(parse_import(i) for i in _require_list(data.get("imports"), "imports")),
            annotations_before=_parse_decorations(data.get("annotations_before"), "annotations_before"),
            annotations_after=_parse_decorations(data.get("annotations_after"), "annotations_after"),
            field_annotations=_parse_decorations(data.get("field_annotations"), "field_annotations"),
        )


def _require_list(value: Any, label: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ConfigurationError(f"'{label}' must be a list.")
    return list(value)


def _parse_names(value: Any, label: str) -> list[str]:
    names = _require_list(value, label)
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"'{label}' entries must be non-empty strings.")
    return [name.strip() for name in names]


def parse_import(value: Any) -> tuple[str, str]:
    """Parse "module::Symbol" or a [module, Symbol] pair."""
    if isinstance(value, str):
        module_path, sep, symbol = value.rpartition("::")
        if sep and module_path and symbol:
            return module_path, symbol
    elif isinstance(value, Sequence) and len(value) == 2 and all(isinstance(v, str) for v in value):
        return value[0], value[1]
    raise ConfigurationError(f"Invalid import {value!r}; expected 'module::Symbol'.")


def _parse_decorations(value: Any, label: str) -> tuple[Decoration, ...]:
    decorations = []
    for entry in _require_list(value, label):
        if isinstance(entry, str):
            decorations.append(Decoration(entry))
            continue
        if not isinstance(entry, Mapping) or not isinstance(entry.get("attribute"), str):
            raise ConfigurationError(f"'{label}' entries need an 'attribute' string.")
        exceptions = _parse_names(entry.get("except"), f"{label}.except")
        decorations.append(Decoration(entry["attribute"], frozenset(exceptions)))
    return tuple(decorations)


def load_options(config_path: Path | str) -> GeneratorOptions:
    """Load generator options from a YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Options file not found: {path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse options file: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Options root must be a mapping.")
    return GeneratorOptions.from_mapping(parsed)
