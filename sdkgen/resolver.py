"""Resolve $ref pointers and merge allOf compositions.

Everything here is side-effect free: the document passed in is never
modified and every resolved schema is a fresh object.

Merge rules, shared by $ref and allOf resolution:

- lists that collide are concatenated (``required`` from every branch
  survives)
- mappings that collide are merged recursively
- any other collision is won by the most specific value, i.e. the
  node's own fields beat whatever came in through $ref or allOf
"""

from __future__ import annotations

import copy
from typing import Any

from .errors import RefError

LOCAL_REF_PREFIX = "#/"


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def resolve_ref(document: dict[str, Any], ref: str) -> dict[str, Any]:
    """Return the node a local ``#/...`` reference points to."""
    if not isinstance(ref, str) or not ref.startswith(LOCAL_REF_PREFIX):
        raise RefError("Only refs starting with '#/' are supported", ref)

    node: Any = document
    for segment in ref[len(LOCAL_REF_PREFIX):].split("/"):
        segment = _unescape(segment)
        if isinstance(node, dict) and segment in node:
            node = node[segment]
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            raise RefError("Reference does not point at anything", ref)

    if not isinstance(node, dict):
        raise RefError("Reference does not point at an object", ref)
    return node


def deep_merge(*objs: dict[str, Any] | None) -> dict[str, Any]:
    """Merge mappings left to right into a new dict.

    >>> deep_merge({"a": [1, 2], "b": 1}, {"a": [3], "b": 2})
    {'a': [1, 2, 3], 'b': 2}
    """
    merged: dict[str, Any] = {}
    for obj in objs:
        if not obj:
            continue
        for key, value in obj.items():
            existing = merged.get(key)
            if isinstance(existing, list) and isinstance(value, list):
                merged[key] = existing + copy.deepcopy(value)
            elif isinstance(existing, dict) and isinstance(value, dict):
                merged[key] = deep_merge(existing, value)
            else:
                merged[key] = copy.deepcopy(value)
    return merged


def deep_omit(value: Any, key_name: str) -> Any:
    """Return a copy of ``value`` with every ``key_name`` key removed, at any depth."""
    if isinstance(value, list):
        return [deep_omit(item, key_name) for item in value]
    if isinstance(value, dict):
        return {k: deep_omit(v, key_name) for k, v in value.items() if k != key_name}
    return value


def equal_ignoring(a: Any, b: Any, *key_names: str) -> bool:
    """Compare two plain structures, ignoring the given keys everywhere."""
    for key_name in key_names:
        a = deep_omit(a, key_name)
        b = deep_omit(b, key_name)
    return a == b


def resolve(
    schema: dict[str, Any],
    document: dict[str, Any],
    *,
    resolve_refs: bool,
    resolve_all_of: bool,
    ignore_ref: str | None = None,
    _seen: frozenset[str] = frozenset(),
) -> dict[str, Any]:
    """Resolve $ref and/or allOf on ``schema`` until none is left at its top level.

    ``ignore_ref`` names a reference to leave out of the result. Callers
    use it to keep a superclass as an edge instead of inlining its fields.
    """
    ref = schema.get("$ref") if resolve_refs else None
    all_of = schema.get("allOf") if resolve_all_of else None

    own = {
        key: value
        for key, value in schema.items()
        if not (resolve_refs and key == "$ref") and not (resolve_all_of and key == "allOf")
    }
    if not ref and not all_of:
        return own

    seen = _seen
    parts: list[dict[str, Any]] = []
    if ref and ref != ignore_ref:
        if ref in seen:
            raise RefError("Circular reference while merging", ref, schema)
        seen = seen | {ref}
        parts.append(resolve_ref(document, ref))

    # allOf branches always get their $ref resolved, or all but one of
    # them would be lost when the branches are merged.
    for branch in all_of or ():
        parts.append(resolve(
            branch,
            document,
            resolve_refs=True,
            resolve_all_of=resolve_all_of,
            ignore_ref=ignore_ref,
            _seen=seen,
        ))

    merged = deep_merge(*parts, own)
    return resolve(
        merged,
        document,
        resolve_refs=resolve_refs,
        resolve_all_of=resolve_all_of,
        ignore_ref=ignore_ref,
        _seen=seen,
    )


def resolve_refs(
    schema: dict[str, Any], document: dict[str, Any], *, ignore_ref: str | None = None,
) -> dict[str, Any]:
    """Resolve $ref only, leaving any allOf in place."""
    return resolve(schema, document, resolve_refs=True, resolve_all_of=False, ignore_ref=ignore_ref)


def resolve_refs_and_all_of(
    schema: dict[str, Any], document: dict[str, Any], *, ignore_ref: str | None = None,
) -> dict[str, Any]:
    """Resolve $ref and merge allOf."""
    return resolve(schema, document, resolve_refs=True, resolve_all_of=True, ignore_ref=ignore_ref)
