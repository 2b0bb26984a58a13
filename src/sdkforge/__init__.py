"""sdkforge -- Generate grouped client SDK and DTO code from OpenAPI documents.

This package turns a parsed API description into named, grouped code
artifacts: one client type per group of operations plus the data-transfer
types the clients exchange. The interesting work happens before any
template is rendered -- every operation gets a unique, stable name and is
assigned to exactly one client group.

Typical workflow::

    sdkforge generate openapi.yaml --kind script_client -o api.ts
    sdkforge inspect operations openapi.yaml

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration and settings precedence.
    parser: Spec loading (file, URL, stdin) and document extraction.
    naming: Operation naming, duplicate detection and client grouping rules.
    generator: Orchestration of client/DTO artifact generation.
    emitters: Jinja2-based reference emitters (TypeScript, C#).
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
