"""Generate command -- render client SDK code from an API description.

Loads the spec, resolves the effective
:class:`~sdkforge.models.GeneratorSettings` (CLI flags over environment
over project config over global config), runs the
:class:`~sdkforge.generator.ClientGenerator` and writes the normalised
text to stdout or ``--output``.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from sdkforge.exceptions import InvalidUsageError, SdkforgeError
from sdkforge.models import ApiDocument, GeneratorSettings, OutputKind, OutputMode
from sdkforge.output import debug, error, get_output, success, suggest


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn :class:`SdkforgeError` into an error message and its exit code."""
    try:
        yield
    except SdkforgeError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def resolve_cli_settings(
    *,
    mode: Optional[OutputMode] = None,
    kind: Optional[OutputKind] = None,
    hint: Optional[str] = None,
    client_suffix: Optional[str] = None,
    tag_filter: Optional[str] = None,
    strategy: Optional[str] = None,
    no_dtos: bool = False,
) -> GeneratorSettings:
    """Build the effective settings from command-line flags.

    ``--hint`` is the legacy way of naming the output role by its file
    path; an explicit ``--kind`` wins over it.
    """
    from sdkforge.config import resolve_settings

    if kind is None and hint is not None:
        kind = OutputKind.from_hint(hint)
        debug(f"Output hint '{hint}' selects kind '{kind.value}'")

    return resolve_settings(
        output_mode=mode,
        output_kind=kind,
        client_suffix=client_suffix,
        tag_filter=tag_filter,
        naming_strategy=strategy,
        generate_dto_types=False if no_dtos else None,
    )


def load_cli_document(spec: str, settings: GeneratorSettings) -> ApiDocument:
    from sdkforge.parser import load_document

    document = load_document(spec, settings.document_settings())
    debug(f"Loaded '{document.info.title}' with {document.operation_count} operation(s)")
    return document


def generate_command(
    ctx: typer.Context,
    spec: str = typer.Argument(help="Spec file path, http(s) URL, or '-' for stdin."),
    mode: Optional[OutputMode] = typer.Option(
        None, "--mode", "-m", help="Artifact subset: full, implementation, contracts."
    ),
    kind: Optional[OutputKind] = typer.Option(
        None, "--kind", "-k", help="Output role: class, script_client, script_models."
    ),
    hint: Optional[str] = typer.Option(
        None, "--hint", help="Legacy output path used to infer --kind."
    ),
    client_suffix: Optional[str] = typer.Option(
        None, "--client-suffix", help="Naming tag, e.g. 'v2' or 'multifront'."
    ),
    tag_filter: Optional[str] = typer.Option(
        None, "--tag-filter", "-t", help="Comma-separated allow-list of tags."
    ),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Naming strategy: first_tag, single_client."
    ),
    no_dtos: bool = typer.Option(False, "--no-dtos", help="Skip DTO generation."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the generated file here instead of stdout."
    ),
) -> None:
    """Generate client code for an API description.

    Example::

        sdkforge generate petstore.yaml --kind script_client -o src/api/client.ts
        sdkforge generate petstore.yaml --mode contracts --tag-filter Pets,Users
    """
    from sdkforge.generator import ClientGenerator

    force = bool((ctx.obj or {}).get("force"))

    with cli_errors():
        if output is not None and output.exists() and not force:
            raise InvalidUsageError(f"{output} already exists (use --force to overwrite)")

        settings = resolve_cli_settings(
            mode=mode,
            kind=kind,
            hint=hint,
            client_suffix=client_suffix,
            tag_filter=tag_filter,
            strategy=strategy,
            no_dtos=no_dtos,
        )
        document = load_cli_document(spec, settings)

        generator = ClientGenerator(settings)
        result = generator.generate_result(document)

        get_output().write_code(
            result.text, language=generator.emitter.language.value, path=output
        )

    if not result.client_groups or not any(g.operations for g in result.client_groups):
        suggest("No operations were generated; check --tag-filter")
    if output is not None:
        success(
            f"Wrote {len(result.client_artifacts)} client and "
            f"{len(result.dto_artifacts)} DTO artifact(s) to {output}"
        )
