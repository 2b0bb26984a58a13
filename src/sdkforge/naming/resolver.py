"""Resolve client and operation names for every operation of a document.

Naming one operation needs a consistent view of all the others: the
conflict rule counts operations that would end up with the same client and
base name, and the duplicate rule scans the whole path table. Resolution
is therefore split in two passes:

1. **Table** -- :class:`NameTable` records ``(path, method, client_name,
   base_name)`` for every operation before any name is final.
2. **Disambiguation** -- :meth:`OperationNameResolver.operation_name`
   applies the naming rules against the completed table.

Which rule applies depends on the target's file role and the document's
``client_suffix`` tag:

=====================  ======================  ====================================
Target                 ``client_suffix``       Rule
=====================  ======================  ====================================
script-style           ``"v2"``                duplicate path -> ``name + name + Seg``
script-style           anything else           name conflict -> ``name + Method``
class-style            anything but            duplicate path -> ``name + Seg``,
                       ``"multifront"``        then name conflict -> ``+ Method``
class-style            ``"multifront"``        name conflict -> ``name + Method``,
                                               then ``+ Method`` unconditionally
=====================  ======================  ====================================

``Seg`` is the UpperCamelCase second-to-last static segment and ``Method``
the UpperCamelCase HTTP method. Generated clients already in use depend on
the exact names, including the doubled fragments.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Iterator, NamedTuple, Optional

from sdkforge.models import ApiDocument, ApiOperation
from sdkforge.naming.duplicates import is_duplicate
from sdkforge.naming.path_names import (
    base_name,
    second_to_last_non_param_segment,
    to_upper_camel_case,
)
from sdkforge.naming.strategies import FirstTagClientStrategy, OperationNameStrategy

logger = logging.getLogger(__name__)

V2_SUFFIX = "v2"
MULTIFRONT_SUFFIX = "multifront"


class NameEntry(NamedTuple):
    """Pre-disambiguation naming facts for one operation."""

    path: str
    method: str
    client_name: str
    base_name: str


class ResolvedName(NamedTuple):
    """Final client and operation name for one operation."""

    path: str
    method: str
    client_name: str
    operation_name: str


class NameTable:
    """Every operation's client and base name, built once per document."""

    def __init__(self, entries: Iterable[NameEntry]) -> None:
        self._entries = list(entries)
        self._counts = Counter((e.client_name, e.base_name) for e in self._entries)

    @classmethod
    def build(cls, document: ApiDocument, strategy: OperationNameStrategy) -> "NameTable":
        return cls(
            NameEntry(
                path=path,
                method=method,
                client_name=strategy.derive_client_name(operation),
                base_name=base_name(path),
            )
            for path, method, operation in document.iter_operations()
        )

    def count(self, client_name: str, name: str) -> int:
        """Number of operations in *client_name* whose base name is *name*."""
        return self._counts[(client_name, name)]

    def __iter__(self) -> Iterator[NameEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class OperationNameResolver:
    """Compute client and operation names against a fully populated document.

    Args:
        document: The document whose operations are being named. Its
            ``settings`` select the naming rule.
        strategy: Client grouping rule; defaults to
            :class:`~sdkforge.naming.strategies.FirstTagClientStrategy`.

    Example::

        resolver = OperationNameResolver(document)
        for path, method, operation in document.iter_operations():
            print(resolver.client_name(operation),
                  resolver.operation_name(path, method, operation))
    """

    def __init__(
        self,
        document: ApiDocument,
        strategy: Optional[OperationNameStrategy] = None,
    ) -> None:
        self.document = document
        self.strategy = strategy or FirstTagClientStrategy()
        self.table = NameTable.build(document, self.strategy)
        self._paths = list(document.paths.keys())

    def client_name(self, operation: ApiOperation) -> str:
        return self.strategy.derive_client_name(operation)

    def operation_name(self, path: str, http_method: str, operation: ApiOperation) -> str:
        """Return the operation name for *operation* at *path*.

        *path* may be given with or without its leading ``/``. The result
        is never empty, though post-processing by the orchestrator may
        still shorten it.
        """
        settings = self.document.settings
        suffix = settings.client_suffix
        base = base_name(path)
        name = base

        if settings.output_kind.is_script_style:
            if suffix == V2_SUFFIX:
                if is_duplicate(path, self._paths):
                    name = name + name + self._segment_disambiguator(path)
            elif self._has_name_conflict(operation, name):
                name += to_upper_camel_case(http_method)
        else:
            if suffix != MULTIFRONT_SUFFIX:
                if is_duplicate(path, self._paths):
                    name += self._segment_disambiguator(path)
                if self._has_name_conflict(operation, base):
                    name += to_upper_camel_case(http_method)
            else:
                if self._has_name_conflict(operation, name):
                    name += to_upper_camel_case(http_method)
                name += to_upper_camel_case(http_method)

        logger.debug("Named %s %s -> %s", http_method.upper(), path, name)
        return name

    def resolve_all(self) -> list[ResolvedName]:
        """Resolve every operation of the document in document order."""
        return [
            ResolvedName(
                path=path,
                method=method,
                client_name=self.client_name(operation),
                operation_name=self.operation_name(path, method, operation),
            )
            for path, method, operation in self.document.iter_operations()
        ]

    def _has_name_conflict(self, operation: ApiOperation, name: str) -> bool:
        return self.table.count(self.client_name(operation), name) > 1

    @staticmethod
    def _segment_disambiguator(path: str) -> str:
        return to_upper_camel_case(second_to_last_non_param_segment(path))


def client_name(document: ApiDocument, operation: ApiOperation) -> str:
    """Return the client name for *operation* using the first-tag rule."""
    return OperationNameResolver(document).client_name(operation)


def operation_name(
    document: ApiDocument,
    path: str,
    http_method: str,
    operation: ApiOperation,
) -> str:
    """Return the operation name for a single operation of *document*.

    Builds a throwaway resolver; use :class:`OperationNameResolver`
    directly when naming more than one operation.
    """
    return OperationNameResolver(document).operation_name(path, http_method, operation)
