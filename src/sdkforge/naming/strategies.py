"""Client naming strategies.

A strategy decides which client group an operation belongs to and whether
the document is split into several clients at all. The orchestrator only
talks to the :class:`OperationNameStrategy` interface, so swapping the
grouping rule is a configuration change (``naming_strategy``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sdkforge.exceptions import InvalidUsageError
from sdkforge.models import ApiOperation
from sdkforge.naming.path_names import to_upper_camel_case


class OperationNameStrategy(ABC):
    """Abstract grouping rule for operations."""

    name: str = ""

    @abstractmethod
    def derive_client_name(self, operation: ApiOperation) -> str:
        """Return the client (group) name for *operation*; may be empty."""

    @abstractmethod
    def supports_multiple_groups(self) -> bool:
        """Return ``True`` if operations are split across several clients."""


class FirstTagClientStrategy(OperationNameStrategy):
    """One client per first tag.

    The client name is the UpperCamelCase form of the operation's first
    tag. Untagged operations share the client with the empty name.
    """

    name = "first_tag"

    def derive_client_name(self, operation: ApiOperation) -> str:
        if not operation.tags:
            return ""
        return to_upper_camel_case(operation.tags[0])

    def supports_multiple_groups(self) -> bool:
        return True


class SingleClientStrategy(OperationNameStrategy):
    """Every operation goes into one client named by the class-name template."""

    name = "single_client"

    def derive_client_name(self, operation: ApiOperation) -> str:
        return ""

    def supports_multiple_groups(self) -> bool:
        return False


STRATEGIES: dict[str, type[OperationNameStrategy]] = {
    FirstTagClientStrategy.name: FirstTagClientStrategy,
    SingleClientStrategy.name: SingleClientStrategy,
}


def get_strategy(name: str) -> OperationNameStrategy:
    """Instantiate the strategy registered under *name*.

    Raises:
        InvalidUsageError: If no strategy has that name.
    """
    try:
        return STRATEGIES[name]()
    except KeyError:
        known = ", ".join(sorted(STRATEGIES))
        raise InvalidUsageError(
            f"Unknown naming strategy '{name}' (expected one of: {known})"
        ) from None
