"""Tests for sdkforge.naming.strategies -- client grouping rules."""

from __future__ import annotations

import pytest

from sdkforge.exceptions import InvalidUsageError
from sdkforge.models import ApiOperation, HTTPMethod
from sdkforge.naming.strategies import (
    FirstTagClientStrategy,
    SingleClientStrategy,
    get_strategy,
)


def _op(*tags: str) -> ApiOperation:
    return ApiOperation(method=HTTPMethod.GET, tags=list(tags))


class TestFirstTagClientStrategy:
    def test_first_tag_is_camel_cased(self) -> None:
        assert FirstTagClientStrategy().derive_client_name(_op("pet-store", "other")) == "PetStore"

    def test_untagged_operation_has_empty_client(self) -> None:
        assert FirstTagClientStrategy().derive_client_name(_op()) == ""

    def test_supports_multiple_groups(self) -> None:
        assert FirstTagClientStrategy().supports_multiple_groups() is True


class TestSingleClientStrategy:
    def test_client_name_is_always_empty(self) -> None:
        strategy = SingleClientStrategy()
        assert strategy.derive_client_name(_op("Pets")) == ""
        assert strategy.supports_multiple_groups() is False


class TestGetStrategy:
    @pytest.mark.parametrize(
        "name, cls",
        [("first_tag", FirstTagClientStrategy), ("single_client", SingleClientStrategy)],
    )
    def test_lookup(self, name: str, cls: type) -> None:
        assert isinstance(get_strategy(name), cls)

    def test_unknown_name(self) -> None:
        with pytest.raises(InvalidUsageError, match="first_tag, single_client"):
            get_strategy("by_path")
