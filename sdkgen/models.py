"""Intermediate model handed to the templates.

Every ``description`` is declared with ``compare=False``: two entities
that differ only in their doc text compare equal, which is exactly the
relation model deduplication needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class TypeInfo:
    name: str
    format: str | None = None


@dataclass
class Property:
    name: str
    spec_name: str
    type: str
    format: str | None = None
    is_required: bool = False
    description: str | None = field(default=None, compare=False)

    def same_shape(self, other: Property) -> bool:
        """Equal apart from description and requiredness."""
        return replace(self, is_required=other.is_required) == other


@dataclass(frozen=True)
class SubclassRef:
    name: str
    spec_name: str


@dataclass
class ObjectModel:
    kind: ClassVar[str] = "object"

    name: str
    spec_name: str
    superclass: str | None = None
    discriminator: str | None = None
    properties: list[Property] = field(default_factory=list)
    inherited_properties: list[Property] = field(default_factory=list)
    initializer_properties: list[Property] = field(default_factory=list)
    nested_models: list[Model] = field(default_factory=list)
    subclasses: list[SubclassRef] = field(default_factory=list)
    description: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class EnumValue:
    name: str
    value: Any


@dataclass
class EnumModel:
    kind: ClassVar[str] = "enum"

    name: str
    enum_type: str
    values: list[EnumValue] = field(default_factory=list)
    description: str | None = field(default=None, compare=False)


Model = Union[ObjectModel, EnumModel]


@dataclass
class Inference:
    """Result of inferring one schema: its type plus every model it produced."""

    type_info: TypeInfo
    models: list[Model] = field(default_factory=list)


@dataclass
class Param:
    name: str
    server_name: str
    location: str | None
    type: str
    format: str | None = None
    is_required: bool = False
    schema_type: str | None = None
    description: str | None = field(default=None, compare=False)


@dataclass
class Method:
    path: str
    method: str
    name: str
    params: list[Param]
    response: Param
    description: str | None = field(default=None, compare=False)


@dataclass
class MethodWithModels:
    """A built method plus the models its params and response produced."""

    method: Method
    models: list[Model] = field(default_factory=list)


@dataclass
class TemplateData:
    api_name: str
    methods: list[Method]
    object_models: list[ObjectModel]
    enum_models: list[EnumModel]
