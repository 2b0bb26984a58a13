"""Inspect commands -- preview naming and grouping without rendering code.

``sdkforge inspect operations`` lists every operation with the client and
operation name the generator would assign; ``sdkforge inspect clients``
lists the resulting client groups.
"""

from __future__ import annotations

from typing import Optional

import typer

from sdkforge.commands.generate import cli_errors, load_cli_document, resolve_cli_settings
from sdkforge.models import OutputKind
from sdkforge.output import get_output


inspect_app = typer.Typer(no_args_is_help=True)

_DEFAULT_CLIENT_LABEL = "(default)"


@inspect_app.command("operations")
def inspect_operations(
    spec: str = typer.Argument(help="Spec file path, http(s) URL, or '-' for stdin."),
    kind: Optional[OutputKind] = typer.Option(None, "--kind", "-k", help="Output role."),
    client_suffix: Optional[str] = typer.Option(
        None, "--client-suffix", help="Naming tag, e.g. 'v2' or 'multifront'."
    ),
    tag_filter: Optional[str] = typer.Option(
        None, "--tag-filter", "-t", help="Comma-separated allow-list of tags."
    ),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Naming strategy."
    ),
) -> None:
    """List operations with their resolved client and operation names.

    Example::

        sdkforge inspect operations petstore.yaml
        sdkforge --json inspect operations petstore.yaml --client-suffix v2
    """
    from sdkforge.generator import ClientGenerator

    with cli_errors():
        settings = resolve_cli_settings(
            kind=kind, client_suffix=client_suffix, tag_filter=tag_filter, strategy=strategy
        )
        document = load_cli_document(spec, settings)
        models = ClientGenerator(settings).collect_operations(document)

    rows = [
        [
            model.http_method.upper(),
            "/" + model.path,
            model.client_name or _DEFAULT_CLIENT_LABEL,
            model.operation_name,
        ]
        for model in models
    ]
    get_output().print_table(
        ["Method", "Path", "Client", "Operation"],
        rows,
        title=f"{document.info.title} -- Operations ({len(rows)})",
    )


@inspect_app.command("clients")
def inspect_clients(
    spec: str = typer.Argument(help="Spec file path, http(s) URL, or '-' for stdin."),
    tag_filter: Optional[str] = typer.Option(
        None, "--tag-filter", "-t", help="Comma-separated allow-list of tags."
    ),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Naming strategy."
    ),
) -> None:
    """List the client groups and their generated class names.

    Example::

        sdkforge inspect clients petstore.yaml --strategy single_client
    """
    from sdkforge.generator import ClientGenerator

    with cli_errors():
        settings = resolve_cli_settings(tag_filter=tag_filter, strategy=strategy)
        document = load_cli_document(spec, settings)
        generator = ClientGenerator(settings)
        groups = generator.group_operations(generator.collect_operations(document))

    rows = [
        [group.name or _DEFAULT_CLIENT_LABEL, group.class_name, str(len(group.operations))]
        for group in groups
    ]
    get_output().print_table(
        ["Client", "Class", "Operations"],
        rows,
        title=f"{document.info.title} -- Clients ({len(rows)})",
    )
