"""C# (class-style) reference emitter.

Clients become an ``I<Client>`` interface (contract) plus a partial class
built on ``HttpClient`` (implementation); schemas become partial classes or
enums, all of them contracts.
"""

from __future__ import annotations

from typing import Any, Optional

from sdkforge.emitters.base import TemplateEmitter
from sdkforge.emitters.types import (
    enum_member_name,
    identifier,
    ref_name,
    request_body_schema,
    response_schema,
    type_name,
)
from sdkforge.models import ArtifactLanguage, OperationModel
from sdkforge.naming.path_names import to_upper_camel_case

_TASK = "System.Threading.Tasks.Task"


class CSharpEmitter(TemplateEmitter):
    """Emit C# clients and DTO classes."""

    language = ArtifactLanguage.CSHARP
    template_prefix = "csharp"
    extension = "cs"

    def operation_context(self, model: OperationModel) -> dict[str, Any]:
        operation = model.operation
        body = request_body_schema(operation)
        result = response_schema(operation)
        parameters = self.parameters_context(model)
        body_type = type_name(body, self.language) if body is not None else None
        return_type = type_name(result, self.language) if result is not None else None
        return {
            "name": to_upper_camel_case(model.operation_name) + "Async",
            "http_method": model.http_method.upper(),
            "path": model.path,
            "parameters": parameters,
            "signature": _signature(parameters, body_type),
            "body_type": body_type,
            "return_type": return_type,
            "result_type": _TASK if return_type is None else f"{_TASK}<{return_type}>",
            "summary": operation.summary,
            "deprecated": operation.deprecated,
        }

    def dto_context(self, name: str, schema: dict[str, Any]) -> dict[str, Any]:
        required = set(schema.get("required", []))
        properties = [
            {
                "name": to_upper_camel_case(identifier(prop_name)),
                "json_name": prop_name,
                "type": type_name(prop_schema, self.language),
                "required": prop_name in required,
                "description": (prop_schema or {}).get("description"),
            }
            for prop_name, prop_schema in (schema.get("properties") or {}).items()
        ]
        return {
            "name": ref_name(name),
            "description": schema.get("description"),
            "properties": properties,
            "enum_values": [
                {"name": enum_member_name(v), "value": v} for v in schema.get("enum", [])
            ],
        }


def _signature(parameters: list[dict[str, Any]], body_type: Optional[str]) -> str:
    """Required parameters, then the body, then optional parameters defaulting to null."""
    parts = [f"{p['type']} {p['name']}" for p in parameters if p["required"]]
    if body_type is not None:
        parts.append(f"{body_type} body")
    parts.extend(
        f"{p['type']}? {p['name']} = null" for p in parameters if not p["required"]
    )
    return ", ".join(parts)
