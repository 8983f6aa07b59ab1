"""Resolved type expressions and the definitions emitted for them.

TypeExpr is a closed set: Primitive, SequenceType, OptionalType and
NamedType. A GeneratedModule is an ordered list of Record, Union and Alias
definitions plus the imports rendered above them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union as _Union


class Primitive(enum.Enum):
    BOOL = "bool"
    STRING = "string"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    INT32 = "int32"
    INT64 = "int64"
    DYNAMIC_MAP = "dynamic_map"


@dataclass(frozen=True)
class SequenceType:
    item: TypeExpr


@dataclass(frozen=True)
class OptionalType:
    inner: TypeExpr


@dataclass(frozen=True)
class NamedType:
    """A reference to another catalogue entry, by its schema name."""

    name: str


TypeExpr = _Union[Primitive, SequenceType, OptionalType, NamedType]


@dataclass(frozen=True)
class Field:
    name: str
    type: TypeExpr
    attributes: tuple[str, ...] = ()


@dataclass(frozen=True)
class Record:
    """A struct with named fields."""

    name: str
    schema_name: str
    fields: tuple[Field, ...]
    attributes: tuple[str, ...] = ()

    kind = "record"


@dataclass(frozen=True)
class Variant:
    name: str
    payload: TypeExpr


@dataclass(frozen=True)
class Union:
    """An enum with one single-payload variant per alternative."""

    name: str
    schema_name: str
    variants: tuple[Variant, ...]
    attributes: tuple[str, ...] = ()

    kind = "union"


@dataclass(frozen=True)
class Alias:
    name: str
    schema_name: str
    target: TypeExpr

    kind = "alias"


Definition = _Union[Record, Union, Alias]


@dataclass
class GeneratedModule:
    """Definitions in catalogue order, plus (module path, symbol) imports."""

    imports: list[tuple[str, str]] = field(default_factory=list)
    definitions: list[Definition] = field(default_factory=list)

    def add_import(self, module_path: str, symbol: str) -> None:
        if (module_path, symbol) not in self.imports:
            self.imports.append((module_path, symbol))
