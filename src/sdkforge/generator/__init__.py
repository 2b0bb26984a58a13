"""Generation orchestrator: from an API document to rendered client code."""

from sdkforge.generator.orchestrator import (
    ClientGenerator,
    generate,
    matches_tag_filter,
    normalize_text,
    post_process_operation_name,
)

__all__ = [
    "ClientGenerator",
    "generate",
    "matches_tag_filter",
    "normalize_text",
    "post_process_operation_name",
]
