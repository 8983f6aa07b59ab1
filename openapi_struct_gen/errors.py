"""Error taxonomy for struct generation.

Every fatal condition raised while loading, collecting, resolving or
emitting derives from GenError, so library callers can catch one type and
report a clean diagnostic. OSError from reading or writing files is not
wrapped and reaches the caller unchanged.
"""

from __future__ import annotations


class GenError(Exception):
    """Base class for all generation failures."""


class WrongFileExtensionError(GenError):
    """Raised when the input file extension does not select a parser."""

    def __init__(self, extension: str | None) -> None:
        self.extension = extension
        if extension:
            super().__init__(f"Bad file type: {extension}")
        else:
            super().__init__("Bad file type")


class DeserializationError(GenError):
    """Raised when the input document cannot be parsed."""

    def __init__(self, format: str, cause: Exception | str) -> None:
        self.format = format
        self.cause = cause
        super().__init__(f"{format.capitalize()} deserialization error occurred: {cause}")


class UnsupportedSchemaError(GenError):
    """Raised for schema constructs that have no target representation."""

    def __init__(self, schema_name: str, construct: str) -> None:
        self.schema_name = schema_name
        self.construct = construct
        super().__init__(f"Unsupported construct in schema {schema_name!r}: {construct}")


class InvalidReferenceError(UnsupportedSchemaError):
    """Raised for references that do not point at #/components/schemas/<Name>."""

    def __init__(self, schema_name: str, reference: str) -> None:
        self.reference = reference
        super().__init__(schema_name, f"reference {reference!r} does not target #/components/schemas")


class InvalidMediaTypeError(GenError):
    """Raised for media type keys without a '/' separator."""

    def __init__(self, media_type: str) -> None:
        self.media_type = media_type
        super().__init__(f"Malformed media type: {media_type!r}")


class NameCollisionError(GenError):
    """Raised when two generated entities would share one name."""

    def __init__(self, kind: str, name: str, owner: str | None = None) -> None:
        self.kind = kind
        self.name = name
        self.owner = owner
        where = f" in {owner!r}" if owner else ""
        super().__init__(f"Duplicate {kind} name{where}: {name!r}")


class ConfigurationError(GenError):
    """Raised when a generator options file is invalid."""
