"""Emitter interface and the Jinja2-backed base implementation.

An emitter turns grouped :class:`~sdkforge.models.OperationModel` lists
and document schemas into :class:`~sdkforge.models.CodeArtifact` values,
and finally renders the selected artifacts into one file. The orchestrator
only relies on :class:`ArtifactEmitter`; :class:`TemplateEmitter` is the
template-driven implementation shared by the bundled emitters.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from sdkforge.emitters.types import lower_camel, parameter_schema, type_name
from sdkforge.exceptions import EmitterError
from sdkforge.models import (
    ArtifactCategory,
    ArtifactLanguage,
    CodeArtifact,
    GeneratorSettings,
    OperationModel,
    OutputMode,
)
from sdkforge.naming.path_names import is_path_param, split_segments

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``emitters/templates/``)."""


class ArtifactEmitter(ABC):
    """Produces and renders code artifacts for one target language."""

    language: ArtifactLanguage = ArtifactLanguage.UNDEFINED

    def __init__(self, settings: Optional[GeneratorSettings] = None) -> None:
        self.settings = settings or GeneratorSettings()

    @abstractmethod
    def generate_client_types(
        self,
        controller_name: str,
        controller_class_name: str,
        operations: list[OperationModel],
    ) -> list[CodeArtifact]:
        """Return the contract and implementation artifacts for one client."""

    @abstractmethod
    def generate_dto_types(self, schemas: dict[str, Any]) -> list[CodeArtifact]:
        """Return one artifact per schema."""

    @abstractmethod
    def render_file(
        self,
        client_types: list[CodeArtifact],
        dto_types: list[CodeArtifact],
        output_mode: OutputMode,
    ) -> str:
        """Render the selected artifacts into the text of one file."""


class TemplateEmitter(ArtifactEmitter):
    """Emitter whose artifacts come from Jinja2 templates.

    Subclasses set :attr:`template_prefix` (the template sub-directory) and
    build per-operation context in :meth:`operation_context`. Template
    names follow ``<prefix>/<kind>.<ext>.j2``.
    """

    template_prefix: str = ""
    extension: str = ""

    def __init__(self, settings: Optional[GeneratorSettings] = None) -> None:
        super().__init__(settings)
        self._env = _create_jinja_env()

    # ------------------------------------------------------------------ #
    # Hooks for subclasses
    # ------------------------------------------------------------------ #

    @abstractmethod
    def operation_context(self, model: OperationModel) -> dict[str, Any]:
        """Return the template context for one operation."""

    @abstractmethod
    def dto_context(self, name: str, schema: dict[str, Any]) -> dict[str, Any]:
        """Return the template context for one schema."""

    def interface_name(self, class_name: str) -> str:
        return f"I{class_name}"

    def parameters_context(self, model: OperationModel) -> list[dict[str, Any]]:
        """Collect path, query and header parameters of *model*.

        Path parameters come first, in path order, and are always required;
        placeholders missing from the parameter list are still emitted as
        string parameters.
        """
        declared = {
            p["name"]: p
            for p in model.operation.parameters
            if p.get("name") and p.get("in") in ("path", "query", "header")
        }

        params: list[dict[str, Any]] = []
        for segment in split_segments(model.path):
            if not is_path_param(segment):
                continue
            raw_name = segment[1:-1]
            parameter = declared.pop(
                raw_name, {"name": raw_name, "in": "path", "schema": {"type": "string"}}
            )
            params.append(self._parameter(parameter, required=True))

        for parameter in declared.values():
            if parameter.get("in") == "path":
                continue
            params.append(self._parameter(parameter, bool(parameter.get("required"))))
        return params

    def _parameter(self, parameter: dict[str, Any], required: bool) -> dict[str, Any]:
        return {
            "name": lower_camel(parameter["name"]),
            "original_name": parameter["name"],
            "location": parameter.get("in", "path"),
            "type": type_name(parameter_schema(parameter), self.language),
            "required": required,
        }

    # ------------------------------------------------------------------ #
    # ArtifactEmitter
    # ------------------------------------------------------------------ #

    def generate_client_types(
        self,
        controller_name: str,
        controller_class_name: str,
        operations: list[OperationModel],
    ) -> list[CodeArtifact]:
        context = {
            "controller_name": controller_name,
            "class_name": controller_class_name,
            "interface_name": self.interface_name(controller_class_name),
            "base_class": self.settings.base_class,
            "generate_interface": self.settings.generate_client_interfaces,
            "bases": [
                base
                for base in (
                    self.settings.base_class,
                    self.interface_name(controller_class_name)
                    if self.settings.generate_client_interfaces
                    else None,
                )
                if base
            ],
            "operations": [self.operation_context(op) for op in operations],
        }

        artifacts: list[CodeArtifact] = []
        if self.settings.generate_client_interfaces:
            artifacts.append(
                CodeArtifact(
                    type_name=context["interface_name"],
                    language=self.language,
                    category=ArtifactCategory.CONTRACT,
                    code=self.render("client_interface", context),
                )
            )
        if self.settings.generate_client_classes:
            artifacts.append(
                CodeArtifact(
                    type_name=controller_class_name,
                    language=self.language,
                    category=ArtifactCategory.IMPLEMENTATION,
                    code=self.render("client", context),
                )
            )
        return artifacts

    def generate_dto_types(self, schemas: dict[str, Any]) -> list[CodeArtifact]:
        artifacts = []
        for name, schema in schemas.items():
            if not isinstance(schema, dict):
                logger.warning("Skipping schema %s: not an object", name)
                continue
            context = self.dto_context(name, schema)
            template = "enum" if context.get("enum_values") else "dto"
            artifacts.append(
                CodeArtifact(
                    type_name=context["name"],
                    language=self.language,
                    category=ArtifactCategory.CONTRACT,
                    code=self.render(template, context),
                )
            )
        return artifacts

    def render_file(
        self,
        client_types: list[CodeArtifact],
        dto_types: list[CodeArtifact],
        output_mode: OutputMode,
    ) -> str:
        return self.render(
            "file",
            {
                "clients": [a.code for a in client_types],
                "dtos": [a.code for a in dto_types],
                "output_mode": output_mode.value,
                "namespace": self.settings.namespace,
            },
        )

    def render(self, kind: str, context: dict[str, Any]) -> str:
        """Render ``<prefix>/<kind>.<ext>.j2`` with *context*.

        Raises:
            EmitterError: If the template is missing or fails to render.
        """
        name = f"{self.template_prefix}/{kind}.{self.extension}.j2"
        try:
            return self._env.get_template(name).render(**context)
        except TemplateNotFound as exc:
            raise EmitterError(f"Template not found: {name}") from exc
        except TemplateError as exc:
            raise EmitterError(f"Failed to render {name}: {exc}") from exc


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for the code templates.

    Autoescape stays off for source-code templates; block trimming and
    lstrip keep template authoring readable without leaking indentation.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2", "cs.j2")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
