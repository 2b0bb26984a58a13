"""Detect sibling paths that the naming scheme cannot tell apart.

Two paths collide when they share the same two-segment prefix, end in the
same static segment and carry the same parameter shape past the prefix,
for example::

    /v2/amla/{portal}/{locale}/foo
    /v2/amla/{region}/{lang}/foo

Both would be named ``foo``; :func:`is_duplicate` lets the caller append a
disambiguator instead.
"""

from __future__ import annotations

import logging
from typing import Iterable, Union

from sdkforge.models import ApiDocument
from sdkforge.naming.path_names import is_path_param, last_static_segment

logger = logging.getLogger(__name__)

_PREFIX_DEPTH = 2
"""Number of leading segments that form the shared prefix."""


def is_duplicate(candidate_path: str, paths: Union[ApiDocument, Iterable[str]]) -> bool:
    """Return ``True`` if another path structurally collides with *candidate_path*.

    A path in *paths* is a duplicate of the candidate when all of the
    following hold:

    * it starts with the candidate's two-segment prefix (case-insensitive);
    * both paths carry more than one parameter past the prefix, at the
      same segment positions;
    * their last static segments are equal.

    The candidate's own entry is never a duplicate of itself, so a table
    that holds only the candidate yields ``False``. A leading ``/`` is
    optional on both the candidate and the table keys.

    Args:
        candidate_path: The path being named (e.g.
            ``"v2/amla/{portal}/{locale}/foo"``).
        paths: The full path table, either an
            :class:`~sdkforge.models.ApiDocument` or any iterable of path
            strings.

    Returns:
        ``True`` when a colliding sibling exists, ``False`` otherwise.

    Example::

        >>> table = ["/v2/amla/{portal}/{locale}/foo", "/v2/amla/{region}/{lang}/foo"]
        >>> is_duplicate("/v2/amla/{portal}/{locale}/foo", table)
        True
        >>> is_duplicate("/v2/amla/{portal}/{locale}/foo", table[:1])
        False
    """
    if isinstance(paths, ApiDocument):
        paths = paths.paths.keys()

    segments = candidate_path.lstrip("/").split("/")
    prefix = ("/" + "/".join(segments[:_PREFIX_DEPTH])).lower()
    candidate_params = _param_positions(segments)
    candidate_last = last_static_segment(segments)

    for path in paths:
        path_segments = path.lstrip("/").split("/")
        if path_segments == segments:
            continue

        if not ("/" + path.lstrip("/")).lower().startswith(prefix):
            continue

        params = _param_positions(path_segments)
        if (
            len(candidate_params) > 1
            and len(params) > 1
            and last_static_segment(path_segments) == candidate_last
            and params == candidate_params
        ):
            logger.debug("Path %s collides with %s", candidate_path, path)
            return True

    return False


def _param_positions(segments: list[str]) -> list[int]:
    """Return the indices of parameter segments past the shared prefix."""
    return [
        index
        for index, segment in enumerate(segments)
        if index >= _PREFIX_DEPTH and is_path_param(segment)
    ]
