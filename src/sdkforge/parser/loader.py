"""Read API descriptions from a URL, a local file, or stdin.

Both JSON and YAML documents are accepted; the format is guessed from the
file extension or response content type and otherwise from the content.

* :func:`load_spec` -- load and parse a document from any supported source.
* :func:`validate_spec_version` -- check the ``openapi``/``swagger`` field.

The resulting dict is turned into an :class:`~sdkforge.models.ApiDocument`
by :func:`~sdkforge.parser.extractor.extract_document`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from sdkforge.exceptions import SpecParseError

logger = logging.getLogger(__name__)

_URL_TIMEOUT = 30.0


def load_spec(source: str) -> dict[str, Any]:
    """Load an API description from a URL, a file path, or stdin (``-``).

    Args:
        source: An ``http(s)://`` URL, a file path, or ``-`` for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document over HTTP, using the content type as a format hint."""
    logger.debug("Fetching spec from %s", url)
    try:
        response = httpx.get(url, timeout=_URL_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    hint = _format_hint(response.headers.get("content-type", ""))
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a local ``.json``, ``.yaml`` or ``.yml`` file.

    Unknown extensions fall back to content-based detection.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    return _parse_content(content, hint=_format_hint(file_path.suffix))


def _format_hint(label: str) -> str:
    """Map a file suffix or content type to ``"json"``, ``"yaml"`` or ``""``."""
    label = label.lower()
    if "json" in label:
        return "json"
    if "yaml" in label or "yml" in label:
        return "yaml"
    return ""


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    JSON is tried first unless *hint* is ``"yaml"``; a ``"json"`` hint
    disables the YAML fallback.

    Raises:
        SpecParseError: If neither format yields a mapping.
    """
    json_error: Optional[Exception] = None
    yaml_error: Optional[Exception] = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_mapping(result)

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return result


def validate_spec_version(spec: dict[str, Any]) -> str:
    """Return the document's version string after checking it is supported.

    OpenAPI 3.x documents and Swagger 2.0 documents are accepted.

    Args:
        spec: The parsed document.

    Returns:
        The ``openapi`` or ``swagger`` version string (e.g. ``"3.0.3"``,
        ``"2.0"``).

    Raises:
        SpecParseError: If the version field is missing or unsupported.

    Example::

        >>> validate_spec_version({"openapi": "3.1.0"})
        '3.1.0'
        >>> validate_spec_version({"swagger": "2.0"})
        '2.0'
    """
    if "swagger" in spec:
        swagger_version = str(spec["swagger"])
        if swagger_version == "2.0":
            return swagger_version
        raise SpecParseError(
            f"Unsupported Swagger version: {swagger_version}. Only Swagger 2.0 is supported."
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise SpecParseError(
            "Missing 'openapi' or 'swagger' field. Is this an API description?"
        )

    version_str = str(openapi_version)
    if version_str.startswith("3."):
        return version_str

    raise SpecParseError(
        f"Unsupported OpenAPI version: {version_str}. Only OpenAPI 3.x and Swagger 2.0 are supported."
    )
