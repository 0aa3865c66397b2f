"""Build identifiers for generated code from names found in the document.

Examples:
  camel_case("anon_id")                          -> "anonId"
  camel_case("/features/{tag}/post")             -> "featuresTagPost"
  class_name_from_components("getFeatures", "sample_query")
                                                 -> "GetFeaturesSampleQuery"
  class_name_from_components("ClientData", "dev", skip=1)
                                                 -> "Dev"
  class_name_from_ref("#/definitions/client_data")
                                                 -> "ClientData"
"""

from __future__ import annotations

import re

# Words are runs of letters/digits; case humps split words as well.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+\d*|\d+")

# Names that must not be produced for a class when components are skipped.
_RESERVED_CLASS_NAMES = {"Type"}

# Keywords that are escaped with backticks when used as member names.
_RESERVED_WORDS = {"default", "as"}


def words(value: str) -> list[str]:
    """Split a string into words on separators and camel-case humps."""
    return _WORD_RE.findall(str(value))


def upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def camel_case(value: str) -> str:
    """Convert any separator-delimited or camel-cased string to camelCase."""
    parts = [w.lower() for w in words(value)]
    if not parts:
        return ""
    first, *rest = parts
    return first + "".join(part.capitalize() for part in rest)


def _joined_name(*components: str) -> str:
    name = camel_case("/".join(str(c) for c in components))
    if name[:1].isdigit():
        return f"_{name}"
    return name


def name_from_components(*components: str) -> str:
    """Build a camelCase identifier that never starts with a digit.

    Reserved words come back wrapped in backticks, e.g. "`default`".
    """
    name = _joined_name(*components)
    if name in _RESERVED_WORDS:
        return f"`{name}`"
    return name


def class_name_from_components(*components: str, skip: int = 0) -> str:
    """Build a class name from components, optionally dropping the first ``skip``."""
    name = upper_first(_joined_name(*components[skip:]))
    if skip and name in _RESERVED_CLASS_NAMES:
        return class_name_from_components(*components)
    return name


def last_ref_component(ref: str) -> str:
    return ref.rsplit("/", 1)[-1]


def class_name_from_ref(ref: str) -> str:
    return class_name_from_components(last_ref_component(ref))


def join_url(*parts: str | None) -> str:
    """Join URL parts with exactly one slash between them.

    A leading slash on the first part is kept; empty parts are dropped.
    """
    pieces = [str(p) for p in parts if p]
    if not pieces:
        return ""
    leading = "/" if pieces[0].startswith("/") else ""
    return leading + "/".join(p.strip("/") for p in pieces if p.strip("/"))
