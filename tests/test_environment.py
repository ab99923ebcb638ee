"""Tests for the environment probe."""

from __future__ import annotations

import pytest

from flagwarden.environment import detect_context, is_ci


class TestIsCi:
    """Tests for is_ci()."""

    def test_empty_environment(self) -> None:
        assert is_ci({}) is False

    @pytest.mark.parametrize("value", ["true", "1", "yes", "True"])
    def test_generic_ci_on(self, value: str) -> None:
        assert is_ci({"CI": value}) is True

    @pytest.mark.parametrize("value", ["false", "0", "", "off"])
    def test_generic_ci_off(self, value: str) -> None:
        assert is_ci({"CI": value}) is False

    def test_provider_variable(self) -> None:
        assert is_ci({"GITHUB_ACTIONS": "true"}) is True
        assert is_ci({"JENKINS_URL": "http://jenkins.local"}) is True

    def test_explicit_ci_false_wins(self) -> None:
        assert is_ci({"CI": "false", "BUILD_NUMBER": "42"}) is False

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CI", "true")
        assert is_ci() is True
        monkeypatch.setenv("CI", "false")
        assert is_ci() is False


class TestDetectContext:
    """Tests for detect_context()."""

    def test_explicit_command(self) -> None:
        context = detect_context(command="build", environ={})
        assert context.executing_command == "build"
        assert context.is_ci is False

    def test_command_from_environment(self) -> None:
        env = {"FLAGWARDEN_EXECUTING_COMMAND": "develop", "CI": "1"}
        context = detect_context(environ=env)
        assert context.executing_command == "develop"
        assert context.is_ci is True

    def test_explicit_command_beats_environment(self) -> None:
        env = {"FLAGWARDEN_EXECUTING_COMMAND": "develop"}
        assert detect_context(command="serve", environ=env).executing_command == "serve"

    def test_defaults_to_all(self) -> None:
        assert detect_context(environ={}).executing_command == "all"
