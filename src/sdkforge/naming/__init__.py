"""Operation naming -- derive unique, stable names and client groups.

Typical usage::

    from sdkforge.naming import OperationNameResolver, get_strategy

    resolver = OperationNameResolver(document, get_strategy("first_tag"))
    names = resolver.resolve_all()

Sub-modules:

* :mod:`~sdkforge.naming.path_names` -- turn a URL path into a candidate
  name and locate disambiguating segments.
* :mod:`~sdkforge.naming.duplicates` -- detect sibling paths that would
  otherwise collide.
* :mod:`~sdkforge.naming.strategies` -- client grouping rules.
* :mod:`~sdkforge.naming.resolver` -- the two-pass name resolver.
"""

from sdkforge.naming.duplicates import is_duplicate
from sdkforge.naming.path_names import (
    base_name,
    second_to_last_non_param_segment,
    to_upper_camel_case,
)
from sdkforge.naming.resolver import (
    NameTable,
    OperationNameResolver,
    ResolvedName,
    client_name,
    operation_name,
)
from sdkforge.naming.strategies import (
    FirstTagClientStrategy,
    OperationNameStrategy,
    SingleClientStrategy,
    get_strategy,
)

__all__ = [
    "FirstTagClientStrategy",
    "NameTable",
    "OperationNameResolver",
    "OperationNameStrategy",
    "ResolvedName",
    "SingleClientStrategy",
    "base_name",
    "client_name",
    "get_strategy",
    "is_duplicate",
    "operation_name",
    "second_to_last_non_param_segment",
    "to_upper_camel_case",
]
