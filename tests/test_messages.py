"""Tests for the console message builder and text renderers."""

from __future__ import annotations

from flagwarden.core.models import FlagDefinition, FlagResolution, ResolutionSource
from flagwarden.display.messages import (
    ACTIVE_HEADER,
    ROLLOUT_EXPLANATION,
    PlainRenderer,
    TerminalRenderer,
    build_message,
    flag_line,
    other_flags_heading,
)

A = FlagDefinition(name="A", description="first flag")
B = FlagDefinition(
    name="B",
    description="second flag",
    experimental=True,
    umbrella_issue_url="https://example.com/issues/1",
)
C = FlagDefinition(name="C", description="third flag")
R = FlagDefinition(name="R", description="rolled out")


def _config(flag: FlagDefinition) -> FlagResolution:
    return FlagResolution(flag=flag, source=ResolutionSource.CONFIG)


def _rollout(flag: FlagDefinition) -> FlagResolution:
    return FlagResolution(flag=flag, source=ResolutionSource.ROLLOUT, opted_in=True)


class TestFlagLine:
    """Tests for flag_line()."""

    def test_plain_line(self) -> None:
        assert flag_line(A, PlainRenderer()) == "\n- A · first flag"

    def test_badge_and_link(self) -> None:
        assert flag_line(B, PlainRenderer()) == (
            "\n- B · EXPERIMENTAL · (Umbrella Issue (https://example.com/issues/1)) · second flag"
        )


class TestOtherFlagsHeading:
    """Tests for other_flags_heading()."""

    def test_singular(self) -> None:
        assert other_flags_heading(1).startswith("There is one other flag available")

    def test_plural(self) -> None:
        assert other_flags_heading(3).startswith("There are 3 other flags available")


class TestBuildMessage:
    """Tests for build_message()."""

    def test_nothing_enabled(self) -> None:
        assert build_message((), (A, B), {"A": False}, PlainRenderer()) == ""

    def test_active_flags_only(self) -> None:
        message = build_message((_config(A),), (A,), {"A": True}, PlainRenderer())
        assert message == f"{ACTIVE_HEADER}\n- A · first flag\n"

    def test_discovery_listing_with_config(self) -> None:
        message = build_message((_config(A),), (A, B, C), {"A": True}, PlainRenderer())
        assert message == (
            f"{ACTIVE_HEADER}"
            "\n- A · first flag"
            "\n\nThere are 2 other flags available that you might be interested in:"
            "\n- B · EXPERIMENTAL · (Umbrella Issue (https://example.com/issues/1)) · second flag"
            "\n- C · third flag"
            "\n"
        )

    def test_single_other_flag(self) -> None:
        message = build_message((_config(A),), (A, C), {"A": True}, PlainRenderer())
        assert "There is one other flag available that you might be interested in:\n- C" in message

    def test_no_discovery_listing_without_config(self) -> None:
        message = build_message((_rollout(R),), (A, R), {}, PlainRenderer())
        assert "other flag" not in message

    def test_opted_in_flags_listed_under_rollout_paragraph(self) -> None:
        message = build_message(
            (_config(A), _rollout(R)),
            (A, R),
            {"A": True},
            PlainRenderer(),
        )
        assert message == (
            f"{ACTIVE_HEADER}"
            "\n- A · first flag"
            "\n"
            f"{ROLLOUT_EXPLANATION}"
            "\n- R · rolled out"
            "\n"
        )

    def test_only_opted_in(self) -> None:
        message = build_message((_rollout(R),), (R,), {}, PlainRenderer())
        assert message.startswith(f"{ACTIVE_HEADER}\n{ROLLOUT_EXPLANATION}")
        assert message.endswith("\n- R · rolled out\n")


class TestTerminalRenderer:
    """Tests for TerminalRenderer."""

    def test_link_is_a_terminal_hyperlink(self) -> None:
        out = TerminalRenderer().link("Umbrella Issue", "https://example.com/issues/1")
        assert "Umbrella Issue" in out
        assert "\x1b]8;" in out
        assert "https://example.com/issues/1" in out

    def test_badge_is_styled(self) -> None:
        out = TerminalRenderer().badge("EXPERIMENTAL")
        assert "EXPERIMENTAL" in out
        assert "\x1b[" in out
