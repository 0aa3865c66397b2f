"""Map OpenAPI primitive types to target-language type names.

A type map is a closed set of tagged entries:

- ``Literal("Bool")``: always the same name
- ``ByFormat({"int64": "Int64"}, default="Int32")``: chosen by ``format``
- ``Parametric("Array<{}>")``: a constructor applied to an inner type name
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

from .errors import UnsupportedSchemaError

# (type, format) pairs whose format is carried on the TypeInfo for codegen.
PRESERVED_FORMATS: frozenset[tuple[str, str]] = frozenset({
    ("string", "date"),
    ("string", "date-time"),
    ("integer", "int64"),
})


@dataclass(frozen=True)
class Literal:
    name: str


@dataclass(frozen=True)
class ByFormat:
    formats: Mapping[str, str]
    default: str

    def pick(self, fmt: str | None) -> str:
        if fmt is not None and fmt in self.formats:
            return self.formats[fmt]
        return self.default


@dataclass(frozen=True)
class Parametric:
    template: str

    def apply(self, inner: str) -> str:
        return self.template.format(inner)


TypeMapEntry = Union[Literal, ByFormat, Parametric]


@dataclass(frozen=True)
class TypeMap:
    """Per-language table of primitive type names.

    ``array`` and ``object`` are constructors; ``void`` is used for
    untyped schemas and ``any`` for the values of free-form objects.
    """

    void: str
    any: str
    array: Parametric
    object: Parametric
    primitives: Mapping[str, TypeMapEntry] = field(default_factory=dict)

    def primitive(self, type_name: str | None, fmt: str | None = None) -> str:
        """Look up a primitive type, raising for anything the map does not know."""
        entry = self.primitives.get(type_name) if type_name else None
        if isinstance(entry, Literal):
            return entry.name
        if isinstance(entry, ByFormat):
            return entry.pick(fmt)
        if isinstance(entry, Parametric):
            raise UnsupportedSchemaError(
                f"Type {type_name!r} needs an inner type and cannot be used as a primitive"
            )
        raise UnsupportedSchemaError(f"I don't know how to process a schema of type {type_name!r}")

    def array_of(self, inner: str) -> str:
        return self.array.apply(inner)

    def map_of(self, inner: str | None = None) -> str:
        return self.object.apply(inner or self.any)


def preserved_format(type_name: str | None, fmt: str | None) -> str | None:
    """Return ``fmt`` if codegen needs to see it for this type, else None."""
    if type_name and fmt and (type_name, fmt) in PRESERVED_FORMATS:
        return fmt
    return None
