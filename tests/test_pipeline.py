"""
Tests for the enumeration pipeline (aggregation over sources).
"""

import asyncio

import pytest

from adapters.subdomain_sources import QuakeSource
from adapters.subdomain_sources.stream import SourceRun
from conftest import FakeQuake, quake_page
from core.domain.models import ResultItem, RunStatistics
from core.errors import TransportFailure
from core.services.enumeration_pipeline import (
    PipelineHooks,
    enumerate_domain,
    normalize_domain,
)


class StaticSource:
    """Fuente en memoria que entrega `items` tal cual."""

    def __init__(self, name, items, skip=False):
        self.name = name
        self._items = items
        self._skip = skip
        self._last = RunStatistics()
        self.domains = []

    def is_default(self):
        return True

    def has_recursive_support(self):
        return False

    def needs_key(self):
        return False

    def add_api_keys(self, keys):
        pass

    def run(self, domain, token=None):
        self.domains.append(domain)

        async def produce(state):
            if self._skip:
                state.skipped = True
                return
            for item in self._items:
                yield item

        return SourceRun(self.name, produce, on_close=self._remember)

    def _remember(self, stats):
        self._last = stats

    def statistics(self):
        return self._last


class TestNormalizeDomain:
    @pytest.mark.parametrize(
        "raw, expected",
        [("example.com", "example.com"), ("  Example.COM. ", "example.com")],
    )
    def test_valid(self, raw, expected):
        assert normalize_domain(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", ".", "exa mple.com", "http://example.com/x"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            normalize_domain(raw)


class TestEnumerateDomain:
    def test_dedupes_across_sources(self):
        """Test hostnames are normalized, deduplicated and sorted."""
        first = StaticSource(
            "one",
            [
                ResultItem.subdomain("one", "B.example.com"),
                ResultItem.subdomain("one", "a.example.com"),
                ResultItem.subdomain("one", ""),
            ],
        )
        second = StaticSource(
            "two",
            [
                ResultItem.subdomain("two", "b.example.com."),
                ResultItem.subdomain("two", "c.example.com"),
            ],
        )
        seen = []
        done = []
        hooks = PipelineHooks(on_result=lambda item: seen.append(item.value), source_done=done.append)

        result = asyncio.run(
            enumerate_domain(domain="Example.com", sources=[first, second], hooks=hooks)
        )

        assert result.domain == "example.com"
        assert result.hostnames == ["a.example.com", "b.example.com", "c.example.com"]
        assert seen == ["b.example.com", "a.example.com", "c.example.com"]
        assert done == ["one", "two"]
        assert first.domains == ["example.com"]
        assert result.statistics["one"].results == 3
        assert result.statistics["two"].results == 2

    def test_errors_are_collected(self, caplog):
        """Test a failing source does not stop the others."""
        failing = StaticSource(
            "bad",
            [ResultItem.failure("bad", TransportFailure("bad", "connection refused"))],
        )
        good = StaticSource("good", [ResultItem.subdomain("good", "a.example.com")])
        errors = []

        result = asyncio.run(
            enumerate_domain(
                domain="example.com",
                sources=[failing, good],
                hooks=PipelineHooks(on_error=errors.append),
            )
        )

        assert result.hostnames == ["a.example.com"]
        assert result.errors == {"bad": ["bad: connection refused"]}
        assert result.statistics["bad"].errors == 1
        assert len(errors) == 1
        assert "connection refused" in caplog.text

    def test_skipped_source(self):
        skipped = StaticSource("nokey", [], skip=True)

        result = asyncio.run(enumerate_domain(domain="example.com", sources=[skipped]))

        assert result.hostnames == []
        assert result.statistics["nokey"].skipped is True

    def test_with_quake_source(self, settings):
        """Test the pipeline drives the real Quake source end to end."""
        fake = FakeQuake([quake_page(["a.example.com", "暂无权限", "a.example.com"], total=3)])
        source = QuakeSource(settings, transport=fake.transport)
        source.add_api_keys(["k"])

        result = asyncio.run(enumerate_domain(domain="example.com", sources=[source]))

        assert result.hostnames == ["a.example.com"]
        assert result.statistics["quake"].results == 3
        assert source.statistics() == result.statistics["quake"]

    def test_invalid_domain_raises(self):
        with pytest.raises(ValueError):
            asyncio.run(enumerate_domain(domain="  ", sources=[]))
