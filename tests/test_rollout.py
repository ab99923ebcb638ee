"""Tests for the gradual rollout oracle."""

from __future__ import annotations

import logging

import pytest

from flagwarden.core.rollout import RecordingSampler, SiteSampler, never_sample, site_id_for_path

_FLAG_NAMES = [f"FLAG_{i}" for i in range(1000)]


class TestSiteSampler:
    """Tests for SiteSampler."""

    def test_empty_site_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            SiteSampler("")

    def test_zero_percent_never_samples(self) -> None:
        sampler = SiteSampler("site-a")
        assert not any(sampler(name, 0) for name in _FLAG_NAMES)

    def test_hundred_percent_always_samples(self) -> None:
        sampler = SiteSampler("site-a")
        assert all(sampler(name, 100) for name in _FLAG_NAMES)

    def test_bucket_range(self) -> None:
        sampler = SiteSampler("site-a")
        assert all(0 <= sampler.bucket(name) < 100 for name in _FLAG_NAMES)

    def test_same_inputs_same_decision(self) -> None:
        first = SiteSampler("site-a")
        second = SiteSampler("site-a")
        for name in _FLAG_NAMES[:100]:
            assert first(name, 25) == second(name, 25)

    def test_larger_percentage_keeps_sampled_sites(self) -> None:
        sampler = SiteSampler("site-a")
        for name in _FLAG_NAMES:
            if sampler(name, 30):
                assert sampler(name, 60)

    def test_roughly_matches_percentage(self) -> None:
        sampler = SiteSampler("site-a")
        share = sum(sampler(name, 50) for name in _FLAG_NAMES) / len(_FLAG_NAMES)
        assert 0.4 < share < 0.6

    def test_sites_are_sampled_independently(self) -> None:
        a = SiteSampler("site-a")
        b = SiteSampler("site-b")
        assert [a.bucket(n) for n in _FLAG_NAMES[:50]] != [b.bucket(n) for n in _FLAG_NAMES[:50]]


class TestSiteIdForPath:
    """Tests for site_id_for_path()."""

    def test_stable_for_same_directory(self, tmp_path) -> None:
        assert site_id_for_path(str(tmp_path)) == site_id_for_path(str(tmp_path))

    def test_differs_between_directories(self, tmp_path) -> None:
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        assert site_id_for_path(str(tmp_path / "a")) != site_id_for_path(str(tmp_path / "b"))


class TestRecordingSampler:
    """Tests for RecordingSampler and never_sample()."""

    def test_records_decisions(self) -> None:
        recording = RecordingSampler(lambda name, pct: name == "IN")
        assert recording("IN", 10) is True
        assert recording("OUT", 20) is False
        assert recording.decisions == {"IN": (10, True), "OUT": (20, False)}

    def test_each_decision_logged_once(self, caplog) -> None:
        recording = RecordingSampler(lambda name, pct: True)
        with caplog.at_level(logging.DEBUG, logger="flagwarden.core.rollout"):
            recording("DEV_SSR", 20)
        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["Rollout sample for 'DEV_SSR' at 20%: in"]

    def test_never_sample(self) -> None:
        assert never_sample("ANY", 100) is False
