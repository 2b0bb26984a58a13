"""Tests for sdkforge.naming.duplicates -- structural path collisions."""

from __future__ import annotations

import logging

import pytest

from sdkforge.models import ApiDocument
from sdkforge.naming.duplicates import is_duplicate

PORTAL = "/v2/amla/{portal}/{locale}/foo"
REGION = "/v2/amla/{region}/{lang}/foo"


class TestIsDuplicate:
    """Detect sibling paths that share prefix, shape and terminal segment."""

    def test_self_only_is_not_duplicate(self) -> None:
        assert is_duplicate(PORTAL, [PORTAL]) is False

    def test_empty_table(self) -> None:
        assert is_duplicate(PORTAL, []) is False

    def test_sibling_pair_is_duplicate_both_ways(self) -> None:
        table = [PORTAL, REGION]
        assert is_duplicate(PORTAL, table) is True
        assert is_duplicate(REGION, table) is True

    def test_leading_slash_is_optional(self) -> None:
        table = [PORTAL, REGION]
        assert is_duplicate(PORTAL.lstrip("/"), table) is True
        assert is_duplicate(PORTAL.lstrip("/"), [PORTAL]) is False

    def test_accepts_document(self, make_document) -> None:
        document = make_document({PORTAL: {"get": []}, REGION: {"get": []}})
        assert isinstance(document, ApiDocument)
        assert is_duplicate(PORTAL, document) is True

    def test_different_terminal_segment(self) -> None:
        assert is_duplicate(PORTAL, [PORTAL, "/v2/amla/{region}/{lang}/bar"]) is False

    def test_different_prefix(self) -> None:
        assert is_duplicate(PORTAL, [PORTAL, "/v2/other/{region}/{lang}/foo"]) is False

    def test_prefix_is_case_insensitive(self) -> None:
        assert is_duplicate(PORTAL, [PORTAL, "/V2/Amla/{region}/{lang}/foo"]) is True

    def test_single_parameter_is_not_enough(self) -> None:
        table = ["/v2/amla/{portal}/foo", "/v2/amla/{region}/foo"]
        assert is_duplicate(table[0], table) is False

    def test_parameters_at_different_positions(self) -> None:
        table = ["/v2/amla/{a}/{b}/x/foo", "/v2/amla/{a}/x/{b}/foo"]
        assert is_duplicate(table[0], table) is False

    def test_different_parameter_count(self) -> None:
        table = [PORTAL, "/v2/amla/{a}/{b}/{c}/foo"]
        assert is_duplicate(PORTAL, table) is False

    def test_trailing_parameter_uses_last_static_segment(self) -> None:
        table = ["/v2/amla/{a}/foo/{b}", "/v2/amla/{c}/foo/{d}"]
        assert is_duplicate(table[0], table) is True

    def test_logs_collision(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="sdkforge.naming.duplicates"):
            is_duplicate(PORTAL, [PORTAL, REGION])
        assert "collides" in caplog.text
