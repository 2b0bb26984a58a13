"""TypeScript (script-style) reference emitter.

Clients become an ``I<Client>`` interface (contract) plus a class using
``fetch`` (implementation); schemas become exported interfaces or enums.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from sdkforge.emitters.base import TemplateEmitter
from sdkforge.emitters.types import (
    enum_member_name,
    ref_name,
    request_body_schema,
    response_schema,
    type_name,
)
from sdkforge.models import ArtifactLanguage, OperationModel

_TS_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")


class TypeScriptEmitter(TemplateEmitter):
    """Emit TypeScript clients and DTO interfaces."""

    language = ArtifactLanguage.TYPESCRIPT
    template_prefix = "typescript"
    extension = "ts"

    def operation_context(self, model: OperationModel) -> dict[str, Any]:
        operation = model.operation
        body = request_body_schema(operation)
        result = response_schema(operation)
        name = model.operation_name
        parameters = self.parameters_context(model)
        body_type = type_name(body, self.language) if body is not None else None
        return {
            "name": name[:1].lower() + name[1:],
            "http_method": model.http_method.upper(),
            "path": model.path,
            "parameters": parameters,
            "signature": _signature(parameters, body_type),
            "body_type": body_type,
            "return_type": type_name(result, self.language) if result is not None else "void",
            "summary": operation.summary,
            "deprecated": operation.deprecated,
        }

    def dto_context(self, name: str, schema: dict[str, Any]) -> dict[str, Any]:
        required = set(schema.get("required", []))
        properties = [
            {
                "name": prop_name,
                "key": prop_name if _TS_IDENTIFIER.fullmatch(prop_name) else json.dumps(prop_name),
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
    """Required parameters, then the body, then optional parameters."""
    parts = [f"{p['name']}: {p['type']}" for p in parameters if p["required"]]
    if body_type is not None:
        parts.append(f"body: {body_type}")
    parts.extend(f"{p['name']}?: {p['type']}" for p in parameters if not p["required"])
    return ", ".join(parts)
