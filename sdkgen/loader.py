"""Load Swagger documents and config files.

Reads JSON or YAML from disk and exposes the top-level sections the
generator walks.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError


def load_document(path: Path) -> dict[str, Any]:
    """Load a JSON or YAML document from disk."""
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc.strerror}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def get_paths(document: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    return document.get("paths") or {}


def get_definitions(document: dict[str, Any]) -> dict[str, Any]:
    """Extract schema definitions from the document."""
    return document.get("definitions") or {}
