"""Generate Rust struct, enum and alias definitions from OpenAPI documents."""

from __future__ import annotations

import logging
from pathlib import Path

from .codegen import render_module, write_module
from .collector import NamedSchema, collect_schemas
from .emitter import build_module
from .errors import (
    ConfigurationError,
    DeserializationError,
    GenError,
    InvalidMediaTypeError,
    InvalidReferenceError,
    NameCollisionError,
    UnsupportedSchemaError,
    WrongFileExtensionError,
)
from .loader import load_spec
from .options import Decoration, GeneratorOptions, load_options

__all__ = [
    "ConfigurationError",
    "Decoration",
    "DeserializationError",
    "GenError",
    "GeneratorOptions",
    "InvalidMediaTypeError",
    "InvalidReferenceError",
    "NameCollisionError",
    "NamedSchema",
    "UnsupportedSchemaError",
    "WrongFileExtensionError",
    "generate",
    "generate_source",
    "load_options",
]

logger = logging.getLogger(__name__)


def generate_source(input_path: Path | str, options: GeneratorOptions | None = None) -> str:
    """Load a document and return the generated Rust source text."""
    spec = load_spec(input_path)
    catalogue = collect_schemas(spec)
    module = build_module(catalogue, options)
    logger.debug("Rendering %d definitions", len(module.definitions))
    return render_module(module)


def generate(
    input_path: Path | str,
    output_path: Path | str,
    options: GeneratorOptions | None = None,
) -> None:
    """Generate definitions for input_path and write them to output_path.

    Raises a GenError subclass for unsupported files, unparsable documents
    and unsupported schema constructs; OSError propagates unchanged. Nothing
    is written unless generation succeeds.
    """
    text = generate_source(input_path, options)
    write_module(text, output_path)
