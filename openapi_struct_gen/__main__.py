"""Entry point: python -m openapi_struct_gen INPUT OUTPUT

Reads an OpenAPI document (.json, .yaml or .yml) and writes Rust definitions.
"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
