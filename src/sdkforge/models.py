"""Canonical Pydantic models shared across all sdkforge modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`GeneratorSettings` and :class:`GlobalConfig`.

**Document models** -- produced by the spec parser and read by the naming
rules and the orchestrator:
    :class:`HTTPMethod`, :class:`DocumentSettings`, :class:`ApiOperation`,
    :class:`ApiInfo` and :class:`ApiDocument`.

**Generation models** -- built fresh for every generation run:
    :class:`OperationModel`, :class:`ClientGroup`, :class:`CodeArtifact`
    and :class:`GenerationResult`.
"""

from __future__ import annotations

import enum
from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Enumerations ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI path-item objects."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"


class OutputMode(str, enum.Enum):
    """Which artifact categories end up in the generated file.

    ``FULL`` keeps everything, ``IMPLEMENTATION`` drops contract artifacts
    and ``CONTRACTS`` keeps only contract artifacts.
    """

    FULL = "full"
    IMPLEMENTATION = "implementation"
    CONTRACTS = "contracts"


class OutputKind(str, enum.Enum):
    """The file role of the generated output.

    Naming rules and artifact selection both branch on whether the target
    is a script-style module (TypeScript) or a statically compiled
    class/contract file, and script-style targets further split into
    client modules and interface/model-only files.
    """

    CLASS = "class"
    SCRIPT_CLIENT = "script_client"
    SCRIPT_MODELS = "script_models"

    @property
    def is_script_style(self) -> bool:
        return self in (OutputKind.SCRIPT_CLIENT, OutputKind.SCRIPT_MODELS)

    @classmethod
    def from_hint(cls, hint: Optional[str]) -> "OutputKind":
        """Derive the output kind from a legacy output-path hint.

        Older configurations identified the target by the path of the
        script-style output file: no path means a class-style target, a
        path mentioning ``interface`` or ``model`` means an
        interface/model-only file, anything else a script client module.

        Example::

            >>> OutputKind.from_hint("")
            <OutputKind.CLASS: 'class'>
            >>> OutputKind.from_hint("src/api/interfaces.ts")
            <OutputKind.SCRIPT_MODELS: 'script_models'>
        """
        if not hint or not hint.strip():
            return cls.CLASS
        lowered = hint.rstrip("\\/").lower()
        if "interface" in lowered or "model" in lowered:
            return cls.SCRIPT_MODELS
        return cls.SCRIPT_CLIENT


class ArtifactLanguage(str, enum.Enum):
    """Target language an emitted :class:`CodeArtifact` is written in."""

    TYPESCRIPT = "typescript"
    CSHARP = "csharp"
    UNDEFINED = "undefined"

    @property
    def is_script_style(self) -> bool:
        return self is ArtifactLanguage.TYPESCRIPT


class ArtifactCategory(str, enum.Enum):
    """Role of an artifact inside the generated file."""

    CONTRACT = "contract"
    IMPLEMENTATION = "implementation"
    UTILITY = "utility"


# --- Configuration models ---


class GeneratorSettings(BaseModel):
    """Settings controlling naming, grouping and artifact selection.

    Resolved by :func:`~sdkforge.config.resolve_settings` from CLI flags,
    environment variables, project config and global config (in that
    order of precedence).
    """

    class_name: str = Field(
        default="{controller}Client",
        description="Client class name template; {controller} is the group name",
    )
    naming_strategy: str = Field(
        default="first_tag",
        description="Operation naming strategy: first_tag, single_client",
    )
    generate_client_classes: bool = Field(
        default=True, description="Emit client implementation artifacts"
    )
    generate_client_interfaces: bool = Field(
        default=True, description="Emit client contract artifacts"
    )
    generate_dto_types: bool = Field(
        default=True, description="Emit DTO artifacts for document schemas"
    )
    output_mode: OutputMode = OutputMode.FULL
    output_kind: OutputKind = OutputKind.CLASS
    client_suffix: str = Field(
        default="", description="Free-form naming tag, e.g. 'v2' or 'multifront'"
    )
    tag_filter: Optional[str] = Field(
        default=None, description="Comma-separated allow-list of tags"
    )
    namespace: str = Field(
        default="GeneratedClients", description="Namespace for class-style output"
    )
    base_class: Optional[str] = Field(
        default=None, description="Base class for generated client classes"
    )

    def generate_controller_name(self, controller_name: str) -> str:
        """Return the client class name for a group.

        Example::

            >>> GeneratorSettings().generate_controller_name("pet-store")
            'PetStoreClient'
            >>> GeneratorSettings().generate_controller_name("")
            'Client'
        """
        from sdkforge.naming.path_names import to_upper_camel_case

        return self.class_name.replace(
            "{controller}", to_upper_camel_case(controller_name)
        )

    def document_settings(self) -> "DocumentSettings":
        """Project the document-level subset of these settings."""
        return DocumentSettings(
            client_suffix=self.client_suffix,
            output_kind=self.output_kind,
            tag_filter=self.tag_filter,
        )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/sdkforge/config.json``.

    Loaded and saved by :func:`~sdkforge.config.load_global_config` and
    :func:`~sdkforge.config.save_global_config`. Values here have the
    lowest precedence; see :func:`~sdkforge.config.resolve_settings`.
    """

    settings: GeneratorSettings = Field(default_factory=GeneratorSettings)


# --- Document models ---


class DocumentSettings(BaseModel):
    """Document-level settings read by the naming rules.

    ``client_suffix`` is a free-form tag (``"v2"`` and ``"multifront"`` switch
    naming branches), ``output_kind`` the file role of the target and
    ``tag_filter`` an optional comma-separated allow-list of tags.
    """

    client_suffix: str = ""
    output_kind: OutputKind = OutputKind.CLASS
    tag_filter: Optional[str] = None


class ApiOperation(BaseModel):
    """One HTTP-method handler at one path.

    Parameter, request body and response definitions are kept as raw
    OpenAPI objects; the naming core never looks inside them.
    """

    method: HTTPMethod
    tags: list[str] = Field(default_factory=list)
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: list[dict[str, Any]] = Field(default_factory=list)
    request_body: Optional[dict[str, Any]] = None
    responses: dict[str, Any] = Field(default_factory=dict)
    deprecated: bool = False


class ApiInfo(BaseModel):
    """API metadata from the document's *Info Object*."""

    title: str = "Untitled API"
    version: str = "0.0.0"
    description: Optional[str] = None


class ApiDocument(BaseModel):
    """A parsed API description.

    ``paths`` maps each URL path (which may contain ``{param}`` segments) to
    its operations keyed by lowercase HTTP method. Both mappings keep
    document order.
    """

    info: ApiInfo = Field(default_factory=ApiInfo)
    paths: dict[str, dict[str, ApiOperation]] = Field(default_factory=dict)
    schemas: dict[str, Any] = Field(default_factory=dict)
    settings: DocumentSettings = Field(default_factory=DocumentSettings)

    def iter_operations(self) -> Iterator[tuple[str, str, ApiOperation]]:
        """Yield ``(path, method, operation)`` triples in document order."""
        for path, operations in self.paths.items():
            for method, operation in operations.items():
                yield path, method, operation

    @property
    def operation_count(self) -> int:
        return sum(len(ops) for ops in self.paths.values())


# --- Generation models ---


class OperationModel(BaseModel):
    """Per-operation record built by the orchestrator.

    One instance per operation per generation run; never shared between
    operations and not modified after it is handed to an emitter.
    """

    model_config = ConfigDict(validate_assignment=True)

    path: str
    http_method: str
    client_name: str = ""
    operation_name: str = ""
    client_suffix: str = ""
    operation: ApiOperation


class ClientGroup(BaseModel):
    """The operations emitted together as one generated client type."""

    name: str
    class_name: str
    operations: list[OperationModel] = Field(default_factory=list)


class CodeArtifact(BaseModel):
    """One emittable unit of generated code.

    The orchestrator only reads ``language`` and ``category``; ``code`` is
    opaque to it.
    """

    type_name: str
    language: ArtifactLanguage = ArtifactLanguage.UNDEFINED
    category: ArtifactCategory = ArtifactCategory.UTILITY
    code: str = ""


class GenerationResult(BaseModel):
    """Everything one generation run produced.

    ``dto_artifacts`` holds the full DTO set even when it was not rendered
    into ``text`` (script-style client targets keep DTOs separate).
    """

    client_groups: list[ClientGroup] = Field(default_factory=list)
    client_artifacts: list[CodeArtifact] = Field(default_factory=list)
    dto_artifacts: list[CodeArtifact] = Field(default_factory=list)
    text: str = ""
