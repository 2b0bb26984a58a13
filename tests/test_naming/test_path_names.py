"""Tests for sdkforge.naming.path_names -- base names, segments and casing."""

from __future__ import annotations

import pytest

from sdkforge.naming.path_names import (
    INDEX_NAME,
    base_name,
    is_path_param,
    last_static_segment,
    second_to_last_non_param_segment,
    split_segments,
    to_upper_camel_case,
)


# ---------------------------------------------------------------------------
# base_name
# ---------------------------------------------------------------------------


class TestBaseName:
    """Candidate operation name derived from the path alone."""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/pets", "pets"),
            ("/api/users/accounts", "accounts"),
            ("store/inventory", "inventory"),
            ("/a/b/c/", "c"),
        ],
    )
    def test_returns_last_segment_verbatim(self, path: str, expected: str) -> None:
        assert base_name(path) == expected

    def test_case_is_not_altered(self) -> None:
        assert base_name("/Admin/userAccounts") == "userAccounts"

    def test_parameter_segments_are_skipped(self) -> None:
        assert base_name("/pets/{petId}") == "pets"
        assert base_name("/users/{id}/posts/{postId}") == "posts"

    def test_segment_with_embedded_placeholder_is_skipped(self) -> None:
        assert base_name("/files/report.{format}") == "files"

    def test_root_path_is_index(self) -> None:
        assert base_name("/") == INDEX_NAME

    def test_only_parameters_is_index(self) -> None:
        assert base_name("/{tenant}/{id}") == "Index"

    def test_empty_path_is_index(self) -> None:
        assert base_name("") == "Index"

    def test_whitespace_segments_are_ignored(self) -> None:
        assert base_name("/pets/ ") == "pets"


class TestBaseNameVersionStripping:
    """Version segments are dropped only when ``v1`` and ``v2`` both appear."""

    def test_single_version_is_kept(self) -> None:
        assert base_name("/users/v2") == "v2"

    def test_single_version_prefix_does_not_matter(self) -> None:
        assert base_name("/v1/users") == "users"

    def test_both_versions_strip_trailing_version(self) -> None:
        assert base_name("/v1/users/v2") == "users"

    def test_both_versions_substrings_trigger_stripping(self) -> None:
        # "v1" only appears inside another segment, still counts
        assert base_name("/apiv1/items/v2") == "items"

    def test_all_segments_versions_is_index(self) -> None:
        assert base_name("/v1/v2") == "Index"


# ---------------------------------------------------------------------------
# second_to_last_non_param_segment
# ---------------------------------------------------------------------------


class TestSecondToLastNonParamSegment:
    def test_skips_parameter_before_last(self) -> None:
        assert second_to_last_non_param_segment("/a/{id}/b") == "a"

    def test_single_parameter_path_is_empty(self) -> None:
        assert second_to_last_non_param_segment("/{id}") == ""

    def test_plain_parent(self) -> None:
        assert second_to_last_non_param_segment("/store/inventory") == "store"

    def test_without_leading_slash(self) -> None:
        assert second_to_last_non_param_segment("v2/amla/{portal}/{locale}/foo") == "amla"

    def test_single_segment_without_slash(self) -> None:
        assert second_to_last_non_param_segment("pets") == ""

    def test_leading_empty_segment_counts_as_static(self) -> None:
        assert second_to_last_non_param_segment("/pets") == ""


# ---------------------------------------------------------------------------
# Segment helpers
# ---------------------------------------------------------------------------


class TestSegmentHelpers:
    def test_split_segments_drops_empty(self) -> None:
        assert split_segments("/api//v1/users/") == ["api", "v1", "users"]

    def test_split_root(self) -> None:
        assert split_segments("/") == []

    @pytest.mark.parametrize(
        "segment, expected",
        [("{id}", True), ("id", False), ("{id", False), ("file.{ext}", False)],
    )
    def test_is_path_param(self, segment: str, expected: bool) -> None:
        assert is_path_param(segment) is expected

    def test_last_static_segment(self) -> None:
        assert last_static_segment(["a", "b", "{id}"]) == "b"

    def test_last_static_segment_none(self) -> None:
        assert last_static_segment(["{a}", "{b}"]) is None


# ---------------------------------------------------------------------------
# to_upper_camel_case
# ---------------------------------------------------------------------------


class TestToUpperCamelCase:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("pets", "Pets"),
            ("pet-store", "PetStore"),
            ("user_accounts", "UserAccounts"),
            ("admin panel", "AdminPanel"),
            ("userAccounts", "UserAccounts"),
            ("GET", "GET"),
            ("get", "Get"),
            ("--x__y", "XY"),
        ],
    )
    def test_conversion(self, value: str, expected: str) -> None:
        assert to_upper_camel_case(value) == expected

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values(self, value) -> None:
        assert to_upper_camel_case(value) == ""
