"""Build an :class:`~sdkforge.models.ApiDocument` from a raw description dict.

Only what naming and emitting need is extracted: the info block, every
operation in document order and the schema table.  Parameter, request body
and response objects stay raw dicts.

Parameter merging follows the OpenAPI rules: path-level parameters provide
defaults, and operation-level parameters override them when they share the
same ``name`` and ``in`` values.  Parameter ``$ref`` pointers are resolved
one level deep; schema ``$ref`` pointers are left for the emitters.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sdkforge.models import (
    ApiDocument,
    ApiInfo,
    ApiOperation,
    DocumentSettings,
    HTTPMethod,
)

logger = logging.getLogger(__name__)

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


def extract_document(
    raw_spec: dict[str, Any],
    settings: Optional[DocumentSettings] = None,
) -> ApiDocument:
    """Extract an :class:`~sdkforge.models.ApiDocument` from *raw_spec*.

    Args:
        raw_spec: The dict returned by :func:`~sdkforge.parser.loader.load_spec`.
        settings: Document-level naming settings; defaults to
            :class:`~sdkforge.models.DocumentSettings`.

    Returns:
        The document with paths and methods in source order.

    Example::

        raw = load_spec("petstore.yaml")
        validate_spec_version(raw)
        document = extract_document(raw, DocumentSettings(client_suffix="v2"))
        for path, method, operation in document.iter_operations():
            print(method.upper(), path, operation.tags)
    """
    document = ApiDocument(
        info=_extract_info(raw_spec),
        paths=_extract_paths(raw_spec),
        schemas=_extract_schemas(raw_spec),
        settings=settings or DocumentSettings(),
    )
    logger.debug(
        "Extracted %d operation(s) on %d path(s) and %d schema(s)",
        document.operation_count,
        len(document.paths),
        len(document.schemas),
    )
    return document


def _extract_info(spec: dict[str, Any]) -> ApiInfo:
    info = spec.get("info") or {}
    return ApiInfo(
        title=info.get("title", "Untitled API"),
        version=str(info.get("version", "0.0.0")),
        description=info.get("description"),
    )


def _extract_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Return ``components.schemas`` (OpenAPI 3) or ``definitions`` (Swagger 2)."""
    components = spec.get("components") or {}
    schemas = components.get("schemas") or spec.get("definitions") or {}
    return dict(schemas)


def _extract_paths(spec: dict[str, Any]) -> dict[str, dict[str, ApiOperation]]:
    """Walk ``paths`` and build the per-path operation maps.

    Keys that are not HTTP methods (``parameters``, ``summary``, vendor
    extensions) are skipped; methods keep their order in the source.
    """
    paths: dict[str, dict[str, ApiOperation]] = {}

    for path, path_item in (spec.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            logger.warning("Skipping path %s: path item is not an object", path)
            continue

        path_params = _resolve_parameters(spec, path_item.get("parameters") or [])
        operations: dict[str, ApiOperation] = {}

        for key, operation in path_item.items():
            method = str(key).lower()
            if method not in _HTTP_METHODS or not isinstance(operation, dict):
                continue

            op_params = _resolve_parameters(spec, operation.get("parameters") or [])
            operations[method] = ApiOperation(
                method=HTTPMethod(method),
                tags=[str(tag) for tag in operation.get("tags") or []],
                operation_id=operation.get("operationId"),
                summary=operation.get("summary"),
                description=operation.get("description"),
                parameters=_merge_parameters(path_params, op_params),
                request_body=_resolve_ref(spec, operation.get("requestBody")),
                responses=operation.get("responses") or {},
                deprecated=bool(operation.get("deprecated", False)),
            )

        paths[path] = operations

    return paths


def _resolve_parameters(
    spec: dict[str, Any], parameters: list[Any]
) -> list[dict[str, Any]]:
    resolved = []
    for parameter in parameters:
        parameter = _resolve_ref(spec, parameter)
        if isinstance(parameter, dict):
            resolved.append(parameter)
    return resolved


def _resolve_ref(spec: dict[str, Any], value: Any) -> Any:
    """Follow a local ``$ref`` one level; leave anything else untouched."""
    if not isinstance(value, dict) or "$ref" not in value:
        return value

    ref = value["$ref"]
    if not isinstance(ref, str) or not ref.startswith("#/"):
        logger.warning("Cannot resolve non-local reference %s", ref)
        return value

    target: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(target, dict) or part not in target:
            logger.warning("Unresolvable reference %s", ref)
            return value
        target = target[part]
    return target


def _merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    name and location (``in`` field).
    """
    op_keys = {(p.get("name", ""), p.get("in", "")) for p in op_params}

    merged = [
        param
        for param in path_params
        if (param.get("name", ""), param.get("in", "")) not in op_keys
    ]
    merged.extend(op_params)
    return merged


def load_document(source: str, settings: Optional[DocumentSettings] = None) -> ApiDocument:
    """Load, validate and extract the document at *source* in one step.

    Raises:
        SpecParseError: If the source cannot be read, parsed or is not a
            supported OpenAPI/Swagger version.
    """
    from sdkforge.parser.loader import load_spec, validate_spec_version

    raw = load_spec(source)
    version = validate_spec_version(raw)
    logger.debug("Loaded %s document from %s", version, source)
    return extract_document(raw, settings)
