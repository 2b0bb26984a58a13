"""Minimal schema-to-type-name resolution for the reference emitters.

Only what the bundled templates need: ``$ref`` pointers become the
referenced schema name, arrays wrap their item type, and JSON Schema
primitives map to the target language's built-ins. Anything richer
(unions, inheritance, nullable wrappers) is left to a dedicated type
resolver.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from sdkforge.models import ApiOperation, ArtifactLanguage
from sdkforge.naming.path_names import to_upper_camel_case

_TS_PRIMITIVES = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "object": "any",
    "file": "Blob",
}

_CS_PRIMITIVES = {
    "string": "string",
    "integer": "int",
    "number": "double",
    "boolean": "bool",
    "object": "object",
    "file": "FileParameter",
}

_CS_FORMATS = {
    "int64": "long",
    "float": "float",
    "date-time": "System.DateTimeOffset",
    "uuid": "System.Guid",
    "binary": "FileParameter",
}

_SUCCESS_CODES = ("200", "201", "202", "default")


def ref_name(ref: str) -> str:
    """Return the schema name a ``$ref`` points at.

    ``"#/components/schemas/pet-owner"`` -> ``"PetOwner"``
    """
    return to_upper_camel_case(identifier(ref.rsplit("/", 1)[-1]))


def identifier(value: str) -> str:
    """Replace characters that cannot appear in an identifier with ``_``."""
    cleaned = re.sub(r"[^0-9a-zA-Z_]", "_", value)
    if cleaned and cleaned[0].isdigit():
        cleaned = "_" + cleaned
    return cleaned


def lower_camel(value: str) -> str:
    """``"pet-id"`` -> ``"petId"``"""
    upper = to_upper_camel_case(identifier(value).replace("_", "-"))
    return upper[:1].lower() + upper[1:]


def type_name(schema: Optional[dict[str, Any]], language: ArtifactLanguage) -> str:
    """Resolve *schema* to a type name in *language*.

    Example::

        >>> type_name({"$ref": "#/components/schemas/Pet"}, ArtifactLanguage.TYPESCRIPT)
        'Pet'
        >>> type_name({"type": "array", "items": {"type": "integer"}}, ArtifactLanguage.CSHARP)
        'System.Collections.Generic.ICollection<int>'
    """
    ts = language is ArtifactLanguage.TYPESCRIPT
    if not schema:
        return "any" if ts else "object"

    if "$ref" in schema:
        return ref_name(schema["$ref"])

    schema_type = schema.get("type", "object")
    if isinstance(schema_type, list):
        non_null = [t for t in schema_type if t != "null"]
        schema_type = non_null[0] if non_null else "object"

    if schema_type == "array":
        item = type_name(schema.get("items"), language)
        return f"{item}[]" if ts else f"System.Collections.Generic.ICollection<{item}>"

    if ts:
        return _TS_PRIMITIVES.get(schema_type, "any")
    return _CS_FORMATS.get(schema.get("format", ""), _CS_PRIMITIVES.get(schema_type, "object"))


def parameter_schema(parameter: dict[str, Any]) -> dict[str, Any]:
    """Return the schema of an OpenAPI 3 or Swagger 2 parameter object."""
    if "schema" in parameter:
        return parameter["schema"] or {}
    return {k: v for k, v in parameter.items() if k in ("type", "format", "items")}


def response_schema(operation: ApiOperation) -> Optional[dict[str, Any]]:
    """Return the schema of the first success response, if it has one."""
    for code in _SUCCESS_CODES:
        response = operation.responses.get(code)
        if not isinstance(response, dict):
            continue
        if "schema" in response:
            return response["schema"]
        for media in (response.get("content") or {}).values():
            if isinstance(media, dict) and media.get("schema"):
                return media["schema"]
    return None


def request_body_schema(operation: ApiOperation) -> Optional[dict[str, Any]]:
    """Return the request body schema (OpenAPI 3 body or Swagger 2 ``in: body``)."""
    if operation.request_body:
        for media in (operation.request_body.get("content") or {}).values():
            if isinstance(media, dict) and media.get("schema"):
                return media["schema"]
    for parameter in operation.parameters:
        if parameter.get("in") == "body":
            return parameter.get("schema") or {}
    return None


def enum_member_name(value: Any) -> str:
    """Return an identifier for an enum value (``"in-stock"`` -> ``"InStock"``)."""
    member = to_upper_camel_case(identifier(str(value)).replace("_", "-"))
    return member if member and not member[0].isdigit() else f"_{member}"
