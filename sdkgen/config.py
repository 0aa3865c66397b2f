"""Read generator configuration from a config file and/or explicit arguments.

A config file looks like::

    {
      "language": "kotlin",
      "output": "client",
      "specs": {
        "FeatureApi": {"spec": "feature-api-spec.json", "className": "FeatureAPI", "basePath": "/feature"}
      }
    }

Spec paths in a config file are relative to the file's directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .languages import Language, get_language
from .loader import load_document

logger = logging.getLogger(__name__)


class ApiConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    spec: Path
    class_name: Optional[str] = Field(default=None, alias="className")
    base_path: str = Field(default="", alias="basePath")
    package_name: Optional[str] = Field(default=None, alias="packageName")


class GeneratorConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    language: str
    specs: dict[str, ApiConfig]
    output: Path = Path("client")


@dataclass
class Api:
    """One API to generate: its settings plus the loaded document."""

    name: str
    class_name: str
    base_path: str
    package_name: str | None
    document: dict[str, Any]


@dataclass
class Config:
    language: Language
    apis: dict[str, Api]
    output: Path


def read_config(
    config_path: Path | str | None = None,
    *,
    language: str | None = None,
    spec: Path | str | None = None,
    name: str | None = None,
    class_name: str | None = None,
    base_path: str | None = None,
    package_name: str | None = None,
    output: Path | str | None = None,
) -> Config:
    """Build a Config from a config file, explicit arguments, or both.

    Explicit ``language`` and ``output`` override the file. Without a
    config file, ``spec`` and ``name`` describe the single API to build.
    """
    file_data: dict[str, Any] = {}
    base_dir = Path.cwd()
    if config_path:
        config_path = Path(config_path).resolve()
        file_data = load_document(config_path)
        base_dir = config_path.parent

    language = language or file_data.get("language")
    if not language:
        raise ConfigError(
            'Missing language: add "language": "swift", "language": "kotlin" or '
            '"language": "js" to the top level of your config file, or pass --language.'
        )

    specs = file_data.get("specs")
    if not specs:
        if not spec or not name:
            raise ConfigError("Missing configuration file or spec/name arguments")
        specs = {
            name: {
                "spec": str(Path(spec).resolve()),
                "className": class_name or name,
                "basePath": base_path or "",
                "packageName": package_name,
            }
        }

    if output:
        output_path = Path(output)
    elif file_data.get("output"):
        output_path = base_dir / file_data["output"]
    else:
        output_path = Path("client")

    try:
        parsed = GeneratorConfig.model_validate(
            {"language": language, "specs": specs, "output": output_path}
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration:\n{exc}") from exc

    apis = {}
    for api_name, api in parsed.specs.items():
        spec_path = api.spec if api.spec.is_absolute() else base_dir / api.spec
        logger.debug("Loading %s from %s", api_name, spec_path)
        apis[api_name] = Api(
            name=api_name,
            class_name=api.class_name or api_name,
            base_path=api.base_path,
            package_name=api.package_name,
            document=load_document(spec_path),
        )

    return Config(language=get_language(parsed.language), apis=apis, output=parsed.output)
