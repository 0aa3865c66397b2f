"""Render templates and write generated client files.

Takes the loaded APIs, builds and verifies their template data, and
renders every template of the target language for each API.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Mapping

import jinja2

from .config import Api
from .context_builder import build_template_data
from .languages import Language, get_language
from .models import TemplateData
from .verify import assert_valid

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def oneline(text: Any) -> str:
    """Collapse a possibly multi-line description into one line."""
    return re.sub(r"\s+", " ", str(text or "")).strip()


def literal(value: Any) -> str:
    """Render an enum value as a source literal."""
    return json.dumps(value, ensure_ascii=False)


def js_identifier(name: str) -> str:
    return name.replace(".", "_")


def kotlin_string(text: str) -> str:
    return str(text).replace("$", "\\$")


def make_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(
        oneline=oneline,
        literal=literal,
        js_identifier=js_identifier,
        kotlin_string=kotlin_string,
    )
    return env


def build_template_datas(language: Language, apis: Mapping[str, Api]) -> dict[str, TemplateData]:
    """Build template data for every API and verify all of it together."""
    datas = {
        api_name: build_template_data(api.document, api_name, language.type_map, api.base_path)
        for api_name, api in apis.items()
    }
    assert_valid(datas)
    return datas


def render(
    language: Language | str,
    apis: Mapping[str, Api],
    options: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Render every file for every API, keyed by output filename."""
    if isinstance(language, str):
        language = get_language(language)
    datas = build_template_datas(language, apis)
    env = make_environment()

    outputs: dict[str, str] = {}
    for api_name, data in datas.items():
        api = apis[api_name]
        args = {
            "api_name": api_name,
            "api_class_name": api.class_name,
            "api_version": api.document.get("info", {}).get("version", "0.0.0"),
            "package_name": api.package_name or api_name,
            "methods": data.methods,
            "object_models": data.object_models,
            "enum_models": data.enum_models,
            "keep_property_names": language.keep_property_names,
            "spec": api.document,
            "options": dict(options or {}),
        }
        for spec in language.templates:
            filename = spec.filename(args)
            if isinstance(spec.source, str):
                outputs[filename] = env.get_template(spec.source).render(**args)
            else:
                outputs[filename] = spec.source(args)
            logger.debug("Rendered %s for %s", filename, api_name)
    return outputs


def write_outputs(outputs: Mapping[str, str], directory: Path) -> list[Path]:
    """Write rendered files into ``directory``, creating it if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for filename, content in outputs.items():
        path = directory / filename
        path.write_text(content, encoding="utf-8")
        written.append(path)
    return written
