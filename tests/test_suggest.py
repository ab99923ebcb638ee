"""Tests for unknown-flag detection and suggestions."""

from __future__ import annotations

import logging

from flagwarden.core.models import UnknownFlag
from flagwarden.core.suggest import (
    UNKNOWN_FLAGS_HEADER,
    closest_name,
    find_unknown_flags,
    format_unknown_flags,
)


class TestClosestName:
    """Tests for closest_name()."""

    def test_close_match_is_suggested(self) -> None:
        assert closest_name("FAST_DEVE", ["FAST_DEVELOP"]) == "FAST_DEVELOP"

    def test_distance_of_four_is_too_far(self) -> None:
        # FAST_DEV -> FAST_DEVELOP needs four insertions.
        assert closest_name("FAST_DEV", ["FAST_DEVELOP"]) is None

    def test_far_name_gets_no_suggestion(self) -> None:
        assert closest_name("ZZZZZZZ", ["FAST_DEVELOP", "PRESERVE_CACHE"]) is None

    def test_nearest_candidate_wins(self) -> None:
        assert closest_name("QUERY_ON", ["QUERY_ON_DEMAND", "QUERY_ONE"]) == "QUERY_ONE"

    def test_tie_keeps_first_candidate(self) -> None:
        assert closest_name("ABC", ["ABD", "ABE"]) == "ABD"

    def test_identical_candidate_is_skipped(self) -> None:
        assert closest_name("FLAG", ["FLAG"]) is None

    def test_no_candidates(self) -> None:
        assert closest_name("FLAG", []) is None


class TestFindUnknownFlags:
    """Tests for find_unknown_flags()."""

    def test_known_names_are_not_reported(self) -> None:
        assert find_unknown_flags(["A", "B"], {"A", "B"}, ["A", "B"]) == []

    def test_unknown_with_and_without_suggestion(self) -> None:
        unknown = find_unknown_flags(
            ["PARALEL_SOURCING", "ZZZZZZZ"],
            {"PARALLEL_SOURCING"},
            ["PARALLEL_SOURCING"],
        )
        assert unknown == [
            UnknownFlag(name="PARALEL_SOURCING", did_you_mean="PARALLEL_SOURCING"),
            UnknownFlag(name="ZZZZZZZ", did_you_mean=None),
        ]

    def test_incompatible_flag_counts_as_unknown(self) -> None:
        unknown = find_unknown_flags(["OLD_FLAG"], set(), ["OLD_FLAG", "OLD_FLAGS"])
        assert unknown == [UnknownFlag(name="OLD_FLAG", did_you_mean="OLD_FLAGS")]

    def test_empty_name_ignored(self) -> None:
        assert find_unknown_flags([""], set(), ["A"]) == []

    def test_unknown_flag_logged_as_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="flagwarden.core.suggest"):
            find_unknown_flags(["FAST_DEVE"], set(), ["FAST_DEVELOP"])
        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert "FAST_DEVE" in caplog.records[0].getMessage()


class TestFormatUnknownFlags:
    """Tests for format_unknown_flags()."""

    def test_empty(self) -> None:
        assert format_unknown_flags([]) == ""

    def test_lines(self) -> None:
        text = format_unknown_flags(
            [
                UnknownFlag(name="FAST_DEVE", did_you_mean="FAST_DEVELOP"),
                UnknownFlag(name="ZZZZZZZ"),
            ]
        )
        assert text == (
            f"{UNKNOWN_FLAGS_HEADER}"
            "\n- FAST_DEVE (did you mean: FAST_DEVELOP)"
            "\n- ZZZZZZZ"
        )
