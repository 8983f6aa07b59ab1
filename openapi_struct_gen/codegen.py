"""Render a GeneratedModule to Rust source and write it out.

Rendering happens entirely in memory; the output file is written once,
after the whole module text exists.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jinja2

from .definitions import GeneratedModule, NamedType, OptionalType, Primitive, SequenceType, TypeExpr
from .naming import type_name

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

_RUST_PRIMITIVES: dict[Primitive, str] = {
    Primitive.BOOL: "bool",
    Primitive.STRING: "String",
    Primitive.FLOAT32: "f32",
    Primitive.FLOAT64: "f64",
    Primitive.INT32: "i32",
    Primitive.INT64: "i64",
    Primitive.DYNAMIC_MAP: "std::collections::HashMap<String, serde_json::Value>",
}


def rust_type(expr: TypeExpr) -> str:
    """Spell a TypeExpr as a Rust type."""
    if isinstance(expr, Primitive):
        return _RUST_PRIMITIVES[expr]
    if isinstance(expr, SequenceType):
        return f"Vec<{rust_type(expr.item)}>"
    if isinstance(expr, OptionalType):
        return f"Option<{rust_type(expr.inner)}>"
    if isinstance(expr, NamedType):
        return type_name(expr.name)
    raise TypeError(f"Not a type expression: {expr!r}")


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["rust_type"] = rust_type
    return env


def render_module(module: GeneratedModule) -> str:
    """Render imports, then every definition in order."""
    template = _environment().get_template("module.rs.j2")
    return template.render(imports=module.imports, definitions=module.definitions)


def write_module(text: str, output_path: Path | str) -> Path:
    """Write generated source, replacing any existing file."""
    path = Path(output_path)
    path.write_text(text, encoding="utf-8")
    logger.info("Generated %s", path)
    return path
