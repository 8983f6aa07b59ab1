"""Load and parse an OpenAPI document.

The parser is chosen from the input file extension: .json is read with the
json module, .yaml and .yml with PyYAML. Accessors below pull the sections
the collector walks out of the parsed mapping.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from .errors import DeserializationError, WrongFileExtensionError

logger = logging.getLogger(__name__)

_JSON_EXTENSIONS = {"json"}
_YAML_EXTENSIONS = {"yaml", "yml"}

_BOOL_TAG = "tag:yaml.org,2002:bool"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that keeps mapping keys as written and reads only true/false as booleans.

    Property names such as `on` or `200` stay strings, as they do in JSON.
    """

    def construct_mapping(self, node, deep=False):
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key = key_node.value
            else:
                key = self.construct_object(key_node, deep=deep)
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


# YAML 1.1 also reads yes/no/on/off as booleans
DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
DocumentLoader.add_implicit_resolver(
    _BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)


def _extension(path: Path) -> str | None:
    suffix = path.suffix
    return suffix[1:] if suffix else None


def parse_spec(text: str, extension: str | None) -> dict[str, Any]:
    """Parse document text using the parser selected by extension."""
    if extension in _JSON_EXTENSIONS:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DeserializationError("json", exc) from exc
        fmt = "json"
    elif extension in _YAML_EXTENSIONS:
        try:
            document = yaml.load(text, Loader=DocumentLoader)
        except yaml.YAMLError as exc:
            raise DeserializationError("yaml", exc) from exc
        fmt = "yaml"
    else:
        raise WrongFileExtensionError(extension)

    if not isinstance(document, dict):
        raise DeserializationError(fmt, "document root must be a mapping")
    return document


def load_spec(path: Path | str) -> dict[str, Any]:
    """Load the OpenAPI document from disk."""
    spec_file = Path(path)
    extension = _extension(spec_file)
    if extension not in _JSON_EXTENSIONS | _YAML_EXTENSIONS:
        raise WrongFileExtensionError(extension)
    try:
        text = spec_file.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DeserializationError("json" if extension in _JSON_EXTENSIONS else "yaml", exc) from exc
    spec = parse_spec(text, extension)
    logger.debug("Loaded %s document from %s", extension, spec_file)
    return spec


def get_components(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract the components section, or an empty mapping."""
    return spec.get("components") or {}


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def is_reference(node: Any) -> bool:
    """Check whether a node is a bare $ref object."""
    return isinstance(node, dict) and "$ref" in node
