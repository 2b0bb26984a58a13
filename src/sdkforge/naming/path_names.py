"""Derive human-readable names from raw API paths.

Pure string helpers used by the operation naming rules. A path such as
``/v2/amla/{portal}/{locale}/foo`` is treated as a list of ``/``-separated
segments; segments wrapped in braces are path parameters and never
contribute to a name.

* :func:`base_name` -- the candidate operation name for a path.
* :func:`second_to_last_non_param_segment` -- the disambiguator source
  used when two sibling paths collide.
* :func:`to_upper_camel_case` -- the casing rule applied to client names
  and disambiguators (never to the base name itself).
"""

from __future__ import annotations

import re
from typing import Optional

_VERSION_SEGMENT = re.compile(r"v\d")
_WORD_SEPARATORS = re.compile(r"[-_\s]+")

INDEX_NAME = "Index"
"""Fallback name for paths without a single static segment (e.g. ``/``)."""


def split_segments(path: str) -> list[str]:
    """Split a path into non-empty segments.

    ``"/api/v1/users"`` -> ``["api", "v1", "users"]``
    ``"/"``             -> ``[]``
    """
    return [s for s in path.split("/") if s]


def is_path_param(segment: str) -> bool:
    """Return ``True`` if *segment* is a path parameter (e.g., ``{id}``)."""
    return segment.startswith("{") and segment.endswith("}")


def last_static_segment(segments: list[str]) -> Optional[str]:
    """Return the last segment that is not a path parameter, or ``None``."""
    for segment in reversed(segments):
        if not is_path_param(segment):
            return segment
    return None


def base_name(path: str) -> str:
    """Return the candidate operation name for *path*.

    The name is the last non-empty segment that holds no ``{`` placeholder,
    with its case left untouched. When the path mentions both ``v1`` and
    ``v2`` anywhere, version segments (``v`` plus one digit) are skipped as
    well. Paths without any usable segment are named :data:`INDEX_NAME`.

    Example::

        >>> base_name("/pets/{petId}")
        'pets'
        >>> base_name("/v1/users/v2")
        'users'
        >>> base_name("/users/v2")
        'v2'
        >>> base_name("/{id}")
        'Index'
    """
    strip_versions = "v1" in path and "v2" in path

    candidates = [
        segment
        for segment in path.split("/")
        if segment.strip() and "{" not in segment
    ]
    if strip_versions:
        candidates = [c for c in candidates if not _VERSION_SEGMENT.fullmatch(c)]

    return candidates[-1] if candidates else INDEX_NAME


def second_to_last_non_param_segment(path: str) -> str:
    """Return the nearest static segment before the last one.

    Scans backwards starting at the second-to-last ``/``-separated segment
    and returns the first segment that neither starts with ``{`` nor ends
    with ``}``. Returns an empty string when there is none.

    Example::

        >>> second_to_last_non_param_segment("/a/{id}/b")
        'a'
        >>> second_to_last_non_param_segment("/{id}")
        ''
    """
    segments = path.split("/")
    for segment in reversed(segments[:-1]):
        if not segment.startswith("{") and not segment.endswith("}"):
            return segment
    return ""


def to_upper_camel_case(value: Optional[str]) -> str:
    """Convert *value* to UpperCamelCase.

    Dashes, underscores and whitespace start a new word; the first
    character of every word is upper-cased and the remainder is kept as is.

    Example::

        >>> to_upper_camel_case("pet-store")
        'PetStore'
        >>> to_upper_camel_case("get")
        'Get'
        >>> to_upper_camel_case("userAccounts")
        'UserAccounts'
        >>> to_upper_camel_case(None)
        ''
    """
    if not value:
        return ""
    words = [w for w in _WORD_SEPARATORS.split(value) if w]
    return "".join(w[:1].upper() + w[1:] for w in words)
