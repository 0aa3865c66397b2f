"""Check generated template data against the generator's invariants.

Every check reports every offending item, so one run over a large spec
surfaces all of its problems at once. Nothing in here raises except
``assert_valid``.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Mapping

from .errors import VerificationError
from .models import EnumModel, Method, ObjectModel, TemplateData

MISSING_TYPE = "missing-type"
FORM_DATA_TYPE = "form-data-type"
DUPLICATE_NAME = "duplicate-name"
MODEL_KIND = "model-kind"
MISSING_NAME = "missing-name"


@dataclass(frozen=True)
class Diagnostic:
    category: str
    message: str

    def __str__(self) -> str:
        return f"[{self.category}] {self.message}"


def _verify_methods(methods: Iterable[Method]) -> list[Diagnostic]:
    problems = []
    for method in methods:
        for param in [*method.params, method.response]:
            if not param.type:
                problems.append(Diagnostic(
                    MISSING_TYPE,
                    f"{method.method.upper()} {method.path} ({method.name}): "
                    f"{param.server_name!r} has no type",
                ))
        for param in method.params:
            if param.location == "formData" and param.schema_type != "file":
                problems.append(Diagnostic(
                    FORM_DATA_TYPE,
                    f"{method.method.upper()} {method.path} ({method.name}): form data param "
                    f"{param.server_name!r} is of type {param.schema_type!r}, not 'file'",
                ))
    return problems


def _verify_models(object_models: list, enum_models: list) -> list[Diagnostic]:
    problems = []
    for expected, models in ((ObjectModel, object_models), (EnumModel, enum_models)):
        for model in models:
            if not isinstance(model, expected):
                problems.append(Diagnostic(
                    MODEL_KIND,
                    f"Found non-{expected.kind} model among {expected.kind} models: {model!r}",
                ))
            elif not model.name:
                problems.append(Diagnostic(MISSING_NAME, f"Found model without name: {model!r}"))

    counts = Counter(getattr(m, "name", None) for m in [*object_models, *enum_models])
    for name, count in counts.items():
        if name and count > 1:
            problems.append(Diagnostic(DUPLICATE_NAME, f"{count} models are named {name!r}"))
    return problems


def verify(
    methods: list[Method], object_models: list, enum_models: list,
) -> list[Diagnostic]:
    """Return every invariant violation in one API's template data."""
    return [*_verify_methods(methods), *_verify_models(object_models, enum_models)]


def verify_template_data(data: TemplateData) -> list[Diagnostic]:
    return verify(data.methods, data.object_models, data.enum_models)


def verify_all(datas: Mapping[str, TemplateData]) -> list[Diagnostic]:
    """Verify several APIs, prefixing each diagnostic with its API name."""
    problems = []
    for api_name, data in datas.items():
        for problem in verify_template_data(data):
            problems.append(Diagnostic(problem.category, f"{api_name}: {problem.message}"))
    return problems


def assert_valid(datas: Mapping[str, TemplateData]) -> None:
    """Raise VerificationError carrying every problem found, if any."""
    problems = verify_all(datas)
    if problems:
        raise VerificationError(problems)
