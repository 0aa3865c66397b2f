"""Custom exceptions for sdkgen."""

from __future__ import annotations

import pprint
from typing import Any


class SdkgenError(Exception):
    """Base exception for everything sdkgen raises on purpose."""


class SchemaError(SdkgenError):
    """Raised when a schema cannot be interpreted."""

    def __init__(self, message: str, schema: Any = None) -> None:
        self.schema = schema
        full_message = message
        if schema is not None:
            full_message = f"{message}\n  {pprint.pformat(schema, width=100, sort_dicts=False)}"
        super().__init__(full_message)


class RefError(SchemaError):
    """Raised for $refs that are not local or do not point at anything."""

    def __init__(self, message: str, ref: str, schema: Any = None) -> None:
        self.ref = ref
        super().__init__(f"{message}: {ref!r}", schema)


class UnsupportedSchemaError(SchemaError):
    """Raised for schemas using a construct the generator cannot model."""


class ConfigError(SdkgenError):
    """Raised for an invalid configuration file or invalid arguments."""


class GeneratorError(SdkgenError):
    """Raised when the generator produced data it should never produce."""


class VerificationError(SdkgenError):
    """Raised when generated template data breaks one or more invariants."""

    def __init__(self, diagnostics: list[Any]) -> None:
        self.diagnostics = list(diagnostics)
        lines = "\n".join(f"  - {d}" for d in self.diagnostics)
        super().__init__(f"Found {len(self.diagnostics)} problem(s):\n{lines}")
