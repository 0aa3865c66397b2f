"""Build template data from a Swagger document.

Turns every path+verb into a Method, pulls the models produced along
the way off the methods, collapses duplicates and links discriminated
superclasses to their subclasses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from .errors import GeneratorError
from .loader import get_paths
from .models import (
    EnumModel,
    Method,
    MethodWithModels,
    Model,
    ObjectModel,
    Param,
    SubclassRef,
    TemplateData,
)
from .naming import camel_case, class_name_from_components, join_url
from .resolver import resolve_refs_and_all_of
from .schema_parser import infer
from .type_map import TypeMap

logger = logging.getLogger(__name__)

# Verbs in the order methods are emitted for one path.
HTTP_METHODS: tuple[str, ...] = (
    "get", "put", "post", "delete", "options", "head", "patch", "trace",
)

# Keys that describe the parameter itself rather than its value's schema.
_PARAM_KEYS = frozenset({"name", "in", "description", "required"})


@dataclass(frozen=True)
class ParamSpec:
    """A parameter or response spec normalized to always carry a schema.

    Swagger lets non-body parameters declare ``type``/``format``/``items``
    directly on the parameter instead of under ``schema``; both shapes end
    up here identically.
    """

    name: str | None
    location: str | None
    description: str | None
    required: bool
    schema: dict[str, Any]

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> ParamSpec:
        if "schema" in raw:
            schema = raw["schema"] or {}
        else:
            schema = {k: v for k, v in raw.items() if k not in _PARAM_KEYS}
        return cls(
            name=raw.get("name"),
            location=raw.get("in"),
            description=raw.get("description"),
            required=bool(raw.get("required", False)),
            schema=schema,
        )


def select_response(responses: dict[Any, Any] | None) -> dict[str, Any]:
    """Pick the success response: first 2xx, then first 3xx, then default."""
    responses = responses or {}
    for prefix in ("2", "3"):
        for status, response in responses.items():
            if str(status).startswith(prefix):
                return response or {}
    return responses.get("default") or {}


def build_param(
    document: dict[str, Any],
    raw: dict[str, Any],
    method_name: str,
    type_map: TypeMap,
) -> tuple[Param, list[Model]]:
    """Build a Param (or a response) and the models its schema needs."""
    spec = ParamSpec.from_raw(resolve_refs_and_all_of(raw, document))
    default_name = class_name_from_components(method_name, spec.name or "response")
    inference = infer(document, spec.schema, default_name, type_map)

    schema_type = None
    if spec.schema:
        schema_type = resolve_refs_and_all_of(spec.schema, document).get("type")

    param = Param(
        name=camel_case(spec.name) if spec.name else "response",
        server_name=spec.name or "response",
        location=spec.location,
        type=inference.type_info.name,
        format=inference.type_info.format,
        is_required=spec.required,
        schema_type=schema_type,
        description=spec.description,
    )
    return param, inference.models


def build_method(
    document: dict[str, Any],
    path: str,
    path_params: list[dict[str, Any]] | None,
    base_path: str,
    verb: str,
    operation: dict[str, Any] | None,
    type_map: TypeMap,
) -> MethodWithModels | None:
    """Build one method, or None when the path does not define ``verb``."""
    if not operation:
        return None

    name = camel_case(operation.get("operationId") or join_url(path, verb))

    params: list[Param] = []
    models: list[Model] = []
    for raw in [*(path_params or []), *(operation.get("parameters") or [])]:
        param, param_models = build_param(document, raw, name, type_map)
        params.append(param)
        models.extend(param_models)

    response, response_models = build_param(
        document, select_response(operation.get("responses")), name, type_map,
    )
    models.extend(response_models)

    method = Method(
        path=join_url("/", base_path, path),
        method=verb,
        name=name,
        params=params,
        response=response,
        description=operation.get("description") or operation.get("summary"),
    )
    logger.debug("Built %s %s as %s (%d models)", verb.upper(), method.path, name, len(models))
    return MethodWithModels(method, models)


def build_methods(
    document: dict[str, Any], base_path: str, type_map: TypeMap,
) -> list[MethodWithModels]:
    """Build every method in the document, sorted by path."""
    built: list[MethodWithModels] = []
    for path, path_item in get_paths(document).items():
        path_item = path_item or {}
        for verb in HTTP_METHODS:
            method = build_method(
                document, path, path_item.get("parameters"), base_path,
                verb, path_item.get(verb), type_map,
            )
            if method is not None:
                built.append(method)
    return sorted(built, key=lambda m: m.method.path)


def dedupe_models(methods: list[MethodWithModels]) -> list[Model]:
    """Collect every model off the methods, dropping structural duplicates.

    Models that differ only in descriptions are duplicates. Models that
    merely share a name are not; the verifier reports those.
    """
    unique: list[Model] = []
    total = 0
    for built in methods:
        for model in built.models:
            total += 1
            if model not in unique:
                unique.append(model)
    logger.debug("Collapsed %d incidental models into %d", total, len(unique))
    return unique


def split_models(models: list[Model]) -> tuple[list[ObjectModel], list[EnumModel]]:
    """Partition models into object models and enum models."""
    object_models: list[ObjectModel] = []
    enum_models: list[EnumModel] = []
    for model in models:
        if isinstance(model, ObjectModel):
            object_models.append(model)
        elif isinstance(model, EnumModel):
            enum_models.append(model)
        else:
            raise GeneratorError(f"Found non-object-or-enum model: {model!r}")
    return object_models, enum_models


def resolve_subclasses(object_models: list[ObjectModel]) -> list[ObjectModel]:
    """Attach subclass references to every discriminated model.

    Subclasses can be declared anywhere in the document, so this runs over
    the complete, deduplicated set rather than during inference.
    """
    resolved = []
    for model in object_models:
        if model.discriminator:
            subclasses = [
                SubclassRef(name=other.name, spec_name=other.spec_name)
                for other in object_models
                if other is not model and other.superclass == model.name
            ]
            model = replace(model, subclasses=subclasses)
        resolved.append(model)
    return resolved


def build_template_data(
    document: dict[str, Any],
    api_name: str,
    type_map: TypeMap,
    base_path: str = "",
) -> TemplateData:
    """Build the full template data for one API document."""
    full_base_path = join_url(base_path, document.get("basePath") or "")
    methods = build_methods(document, full_base_path, type_map)
    object_models, enum_models = split_models(dedupe_models(methods))
    logger.debug(
        "%s: %d methods, %d object models, %d enum models",
        api_name, len(methods), len(object_models), len(enum_models),
    )
    return TemplateData(
        api_name=api_name,
        methods=[built.method for built in methods],
        object_models=resolve_subclasses(object_models),
        enum_models=enum_models,
    )
