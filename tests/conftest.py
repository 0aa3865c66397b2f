"""Shared fixtures for sdkgen tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from sdkgen.languages import JS, KOTLIN, SWIFT
from sdkgen.loader import load_document
from sdkgen.type_map import TypeMap

FIXTURES = Path(__file__).parent / "fixtures"
FEATURE_SPEC = FIXTURES / "feature-api-spec.json"


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def feature_spec() -> dict[str, Any]:
    """The feature API document shared by the builder, renderer and CLI tests."""
    return load_document(FEATURE_SPEC)


# ---------------------------------------------------------------------------
# Type maps
# ---------------------------------------------------------------------------

@pytest.fixture
def swift() -> TypeMap:
    return SWIFT.type_map


@pytest.fixture
def kotlin() -> TypeMap:
    return KOTLIN.type_map


@pytest.fixture
def js() -> TypeMap:
    return JS.type_map
