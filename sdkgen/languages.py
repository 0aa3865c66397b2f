"""Target languages: their type maps and the files rendered for each API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Union

from .errors import ConfigError
from .type_map import ByFormat, Literal, Parametric, TypeMap

TemplateArgs = dict[str, Any]


@dataclass(frozen=True)
class TemplateSpec:
    """One output file: a Jinja2 template path (or a render callable) and its name."""

    source: Union[str, Callable[[TemplateArgs], str]]
    filename: Callable[[TemplateArgs], str]


@dataclass(frozen=True)
class Language:
    name: str
    type_map: TypeMap
    templates: tuple[TemplateSpec, ...]
    # Property names are emitted exactly as the document spells them.
    keep_property_names: bool = False


def _dump_spec(args: TemplateArgs) -> str:
    return json.dumps(args["spec"], indent=2) + "\n"


SWIFT = Language(
    name="swift",
    type_map=TypeMap(
        void="Void",
        any="Any",
        array=Parametric("Array<{}>"),
        object=Parametric("Dictionary<String, {}>"),
        primitives={
            "boolean": Literal("Bool"),
            "number": ByFormat({"int64": "Int64", "int32": "Int32"}, default="Double"),
            "file": Literal("URL"),
            "integer": ByFormat({"int64": "Int64"}, default="Int32"),
            "string": ByFormat({"date": "Date", "date-time": "Date"}, default="String"),
        },
    ),
    templates=(
        TemplateSpec("swift/api.swift.j2", lambda args: f"{args['api_name']}.swift"),
        TemplateSpec("swift/podspec.j2", lambda args: f"{args['api_name']}.podspec"),
    ),
)

KOTLIN = Language(
    name="kotlin",
    type_map=TypeMap(
        void="Response<Void>",
        any="Any",
        array=Parametric("List<{}>"),
        object=Parametric("Map<String, {}>"),
        primitives={
            "boolean": Literal("Boolean"),
            "number": ByFormat({"int64": "Long", "int32": "Int"}, default="Double"),
            "file": Literal("MultipartBody.Part"),
            "integer": ByFormat({"int64": "Long"}, default="Int"),
            "string": ByFormat({"date": "OffsetDateTime", "date-time": "OffsetDateTime"}, default="String"),
        },
    ),
    templates=(
        TemplateSpec("kotlin/api.kt.j2", lambda args: f"{args['api_class_name']}.kt"),
    ),
)

JS = Language(
    name="js",
    type_map=TypeMap(
        void="void",
        any="any",
        array=Parametric("Array<{}>"),
        object=Parametric("Record<string, {}>"),
        primitives={
            "boolean": Literal("boolean"),
            "number": Literal("number"),
            # Platforms disagree on FormData, so files stay untyped.
            "file": Literal("any"),
            "integer": Literal("number"),
            "string": Literal("string"),
        },
    ),
    templates=(
        TemplateSpec("js/package.json.j2", lambda args: "package.json"),
        TemplateSpec("js/babel.config.js.j2", lambda args: "babel.config.js"),
        TemplateSpec("js/index.js.j2", lambda args: "index.js"),
        TemplateSpec("js/index.d.ts.j2", lambda args: "index.d.ts"),
        TemplateSpec(_dump_spec, lambda args: "spec.json"),
    ),
    keep_property_names=True,
)

LANGUAGES: dict[str, Language] = {lang.name: lang for lang in (SWIFT, KOTLIN, JS)}


def get_language(name: str) -> Language:
    try:
        return LANGUAGES[name]
    except KeyError:
        choices = ", ".join(sorted(LANGUAGES))
        raise ConfigError(f"Unknown language {name!r}; expected one of: {choices}") from None
