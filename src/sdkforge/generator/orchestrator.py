"""Turn an API document into the rendered text of one generated file.

This is the top of the generation pipeline.  It walks every operation of a
parsed :class:`~sdkforge.models.ApiDocument` and hands the emitter exactly
the artifacts the requested output needs.

**Algorithm summary**

1. Apply the document's tag allow-list to every ``(path, method,
   operation)`` triple.
2. Name each kept operation with the
   :class:`~sdkforge.naming.resolver.OperationNameResolver` and build an
   :class:`~sdkforge.models.OperationModel` for it.
3. Group the models into clients (one per client name, or a single client
   when the naming strategy does not split).
4. Ask the emitter for client artifacts per group and for DTO artifacts
   once per document.
5. Keep the artifact subset the output mode and file role call for, render
   it and normalise the line endings of the result.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from sdkforge.emitters import ArtifactEmitter, get_emitter
from sdkforge.models import (
    ApiDocument,
    ArtifactCategory,
    ClientGroup,
    CodeArtifact,
    GenerationResult,
    GeneratorSettings,
    OperationModel,
    OutputKind,
    OutputMode,
)
from sdkforge.naming.resolver import OperationNameResolver
from sdkforge.naming.strategies import OperationNameStrategy, get_strategy

logger = logging.getLogger(__name__)

_ASYNC_SUFFIX = "Async"
_BLANK_LINE_RUN = re.compile(r"\n{3,}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_text(text: str) -> str:
    """Strip carriage returns and collapse runs of blank lines.

    Any run of three or more newlines becomes exactly two, so at most one
    blank line separates two blocks.  Applying the function to its own
    output returns it unchanged.

    Example::

        >>> normalize_text("a\\r\\n\\n\\n\\nb")
        'a\\n\\nb'
    """
    return _BLANK_LINE_RUN.sub("\n\n", text.replace("\r", ""))


def post_process_operation_name(name: str) -> str:
    """Make a resolved operation name safe for emitters.

    Dots become underscores and one trailing ``Async`` is removed, since
    emitters add their own asynchronous suffix where the target uses one.

    Example::

        >>> post_process_operation_name("GetUserAsync")
        'GetUser'
        >>> post_process_operation_name("users.list")
        'users_list'
    """
    name = name.replace(".", "_")
    if name.endswith(_ASYNC_SUFFIX):
        name = name[: -len(_ASYNC_SUFFIX)]
    return name


def _filter_entries(tag_filter: Optional[str]) -> list[str]:
    if not tag_filter:
        return []
    return [entry.strip() for entry in tag_filter.split(",") if entry.strip()]


def matches_tag_filter(tags: Iterable[str], tag_filter: Optional[str]) -> bool:
    """Return ``True`` if an operation with *tags* passes *tag_filter*.

    *tag_filter* is a comma-separated allow-list.  Matching is by substring
    containment in either direction, so ``"Admin"`` admits operations tagged
    ``"AdminPanel"`` as well as ``"Adm"``.  An empty or missing allow-list
    admits everything; an untagged operation never passes a non-empty one.

    Example::

        >>> matches_tag_filter(["AdminPanel"], "Admin,User")
        True
        >>> matches_tag_filter(["Billing"], "Admin,User")
        False
        >>> matches_tag_filter([], None)
        True
    """
    entries = _filter_entries(tag_filter)
    if not entries:
        return True
    return any(
        tag in entry or entry in tag for tag in tags if tag for entry in entries
    )


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ClientGenerator:
    """Group, select and render the artifacts of one document.

    Args:
        settings: Generation settings.  ``naming_strategy`` and
            ``output_kind`` pick the defaults for *strategy* and *emitter*.
        emitter: Produces and renders artifacts; defaults to the emitter for
            ``settings.output_kind``.
        strategy: Client grouping rule; defaults to the strategy named by
            ``settings.naming_strategy``.

    Example::

        generator = ClientGenerator(GeneratorSettings(output_kind=OutputKind.SCRIPT_CLIENT))
        text = generator.generate_file(document, OutputMode.FULL)
    """

    def __init__(
        self,
        settings: Optional[GeneratorSettings] = None,
        emitter: Optional[ArtifactEmitter] = None,
        strategy: Optional[OperationNameStrategy] = None,
    ) -> None:
        self.settings = settings or GeneratorSettings()
        self.emitter = emitter or get_emitter(self.settings.output_kind, self.settings)
        self.strategy = strategy or get_strategy(self.settings.naming_strategy)

    # -- Operations -----------------------------------------------------------

    def collect_operations(self, document: ApiDocument) -> list[OperationModel]:
        """Build one :class:`OperationModel` per operation passing the tag filter.

        Names are resolved against the whole document, including operations
        the filter drops, so filtering never changes the name of a kept
        operation.
        """
        resolver = OperationNameResolver(document, self.strategy)
        tag_filter = document.settings.tag_filter

        models: list[OperationModel] = []
        for path, method, operation in document.iter_operations():
            if not matches_tag_filter(operation.tags, tag_filter):
                logger.debug("Tag filter skips %s %s", method.upper(), path)
                continue

            trimmed = path.lstrip("/")
            name = resolver.operation_name(trimmed, method, operation)
            models.append(
                OperationModel(
                    path=trimmed,
                    http_method=method,
                    client_name=resolver.client_name(operation),
                    operation_name=post_process_operation_name(name),
                    client_suffix=document.settings.client_suffix,
                    operation=operation,
                )
            )

        if _filter_entries(tag_filter) and not models and document.operation_count:
            logger.warning("Tag filter '%s' matched no operations", tag_filter)
        return models

    def group_operations(self, models: list[OperationModel]) -> list[ClientGroup]:
        """Split *models* into client groups, in order of first appearance."""
        if not self.strategy.supports_multiple_groups():
            return [
                ClientGroup(
                    name="",
                    class_name=self.settings.generate_controller_name(""),
                    operations=list(models),
                )
            ]

        groups: dict[str, ClientGroup] = {}
        for model in models:
            group = groups.get(model.client_name)
            if group is None:
                group = groups[model.client_name] = ClientGroup(
                    name=model.client_name,
                    class_name=self.settings.generate_controller_name(model.client_name),
                )
            group.operations.append(model)
        return list(groups.values())

    # -- Artifacts ------------------------------------------------------------

    def generate_client_artifacts(
        self, document: ApiDocument
    ) -> tuple[list[ClientGroup], list[CodeArtifact]]:
        """Return the client groups of *document* and all their artifacts."""
        groups = self.group_operations(self.collect_operations(document))
        artifacts: list[CodeArtifact] = []
        for group in groups:
            artifacts.extend(
                self.emitter.generate_client_types(group.name, group.class_name, group.operations)
            )
        logger.debug(
            "Generated %d client artifact(s) for %d client(s)", len(artifacts), len(groups)
        )
        return groups, artifacts

    @staticmethod
    def select_artifacts(
        artifacts: Iterable[CodeArtifact], output_mode: OutputMode
    ) -> list[CodeArtifact]:
        """Keep the artifacts *output_mode* asks for.

        ``FULL`` keeps everything, ``IMPLEMENTATION`` drops contracts and
        ``CONTRACTS`` keeps only contracts.
        """
        if output_mode is OutputMode.IMPLEMENTATION:
            return [a for a in artifacts if a.category is not ArtifactCategory.CONTRACT]
        if output_mode is OutputMode.CONTRACTS:
            return [a for a in artifacts if a.category is ArtifactCategory.CONTRACT]
        return list(artifacts)

    def generate_result(
        self, document: ApiDocument, output_mode: Optional[OutputMode] = None
    ) -> GenerationResult:
        """Run the whole pipeline and keep every intermediate product.

        Args:
            document: The parsed API document.
            output_mode: Artifact subset to render; defaults to
                ``settings.output_mode``.

        Returns:
            A :class:`GenerationResult` whose ``client_artifacts`` are the
            client artifacts that were rendered and whose ``dto_artifacts``
            are all DTOs of the document, rendered or not.
        """
        mode = output_mode or self.settings.output_mode
        groups, client_artifacts = self.generate_client_artifacts(document)
        dto_artifacts = (
            self.emitter.generate_dto_types(document.schemas)
            if self.settings.generate_dto_types
            else []
        )

        script_style = self.emitter.language.is_script_style
        if script_style != document.settings.output_kind.is_script_style:
            logger.warning(
                "Document output kind '%s' does not match the %s emitter",
                document.settings.output_kind.value,
                self.emitter.language.value,
            )
        dtos_wanted = mode in (OutputMode.FULL, OutputMode.CONTRACTS)

        if script_style and document.settings.output_kind is OutputKind.SCRIPT_MODELS:
            clients: list[CodeArtifact] = []
            dtos = dto_artifacts if dtos_wanted else []
        else:
            clients = self.select_artifacts(client_artifacts, mode)
            dtos = dto_artifacts if dtos_wanted and not script_style else []

        logger.debug(
            "Rendering %d client and %d DTO artifact(s) in %s mode",
            len(clients),
            len(dtos),
            mode.value,
        )
        text = normalize_text(self.emitter.render_file(clients, dtos, mode))
        return GenerationResult(
            client_groups=groups,
            client_artifacts=clients,
            dto_artifacts=dto_artifacts,
            text=text,
        )

    def generate_file(
        self, document: ApiDocument, output_mode: Optional[OutputMode] = None
    ) -> str:
        """Return the normalised text of the generated file."""
        return self.generate_result(document, output_mode).text


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def generate(
    document: ApiDocument,
    output_mode: OutputMode = OutputMode.FULL,
    settings: Optional[GeneratorSettings] = None,
    emitter: Optional[ArtifactEmitter] = None,
) -> str:
    """Generate the file text for *document*.

    Without *settings*, generator settings are derived from the document's
    own settings. With *settings*, their document-level subset replaces the
    document's, so naming and the emitter always agree on the output kind,
    client suffix and tag filter. *document* itself is left untouched.

    Example::

        document = extract_document(load_spec("petstore.yaml"))
        print(generate(document, OutputMode.CONTRACTS))
    """
    if settings is None:
        settings = GeneratorSettings(**document.settings.model_dump())
    else:
        document = document.model_copy(update={"settings": settings.document_settings()})
    return ClientGenerator(settings, emitter).generate_file(document, output_mode)
