"""Tests for compatibility annotations and the bounded cache."""

import pytest

from apple_docs.retrieval import compatibility as compat_module
from apple_docs.retrieval.compatibility import (
    CompatibilityAnalyzer,
    detect_deprecation,
    extract_limitations,
    extract_requirements,
    parse_platforms,
    parse_technologies,
)
from apple_docs.utils.cache import LRUCache

from conftest import make_document


def test_parse_platforms() -> None:
    info = parse_platforms(["iOS", "iPadOS", "macOS", "visionOS", "watchOS", "tvOS"])
    assert info.count == 6
    assert info.universal and info.mobile and info.desktop and info.spatial and info.watch and info.tv
    assert parse_platforms([]).count == 0


def test_parse_technologies() -> None:
    info = parse_technologies(["UIKit", "Core ML"])
    assert info.primary == "UIKit"
    assert info.is_legacy is True
    assert info.is_modern is False
    assert info.has_ai is True
    assert parse_technologies(["UIKit", "SwiftUI"]).is_legacy is False


def test_extract_requirements() -> None:
    content = "Requires iOS 17.0 and Minimum macOS 14. Runs on the A12 chip. Requires Xcode 15.2."
    requirements = extract_requirements(content)
    assert requirements["min_ios"] == "17.0"
    assert requirements["min_macos"] == "14"
    assert requirements["min_processor"] == "A12"
    assert requirements["min_xcode"] == "15.2"
    assert "requires_apple_silicon" not in requirements
    assert extract_requirements("Optimised for Apple silicon.")["requires_apple_silicon"] is True


def test_extract_limitations() -> None:
    content = "Uses the LiDAR Scanner. This API is not available in Simulator. 2018 iPads do not support this feature."
    kinds = [item["type"] for item in extract_limitations(content)]
    assert kinds == ["hardware", "simulator", "device_specific"]


@pytest.mark.parametrize(
    ("title", "content", "status"),
    [
        ("Old API", "This is deprecated; use the new one.", "deprecated"),
        ("Views", "Instead, use NavigationStack.", "superseded"),
        ("Migrating from UIKit", "Step by step.", "migration_guide"),
    ],
)
def test_detect_deprecation(title: str, content: str, status: str) -> None:
    assert detect_deprecation(title, content).status == status


def test_detect_deprecation_none() -> None:
    assert detect_deprecation("Views", "Nothing to see.") is None


def test_analyzer_caches_per_document() -> None:
    analyzer = CompatibilityAnalyzer(cache_size=2)
    document = make_document("a", platforms=["iOS"])
    assert analyzer.analyze(document) is analyzer.analyze(document)

    analyzer.analyze(make_document("b"))
    analyzer.analyze(make_document("c"))
    stats = analyzer.cache_stats()
    assert stats.size == 2
    assert stats.max_size == 2

    analyzer.clear_cache()
    assert analyzer.cache_stats().size == 0


def test_analyzer_degrades_to_empty_annotation(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(content: str) -> dict:
        raise RuntimeError("bad record")

    monkeypatch.setattr(compat_module, "extract_requirements", boom)
    analyzer = CompatibilityAnalyzer()
    result = analyzer.analyze(make_document("a", platforms=["iOS"]))
    assert result.platforms.count == 0
    assert result.deprecation is None
    assert analyzer.cache_stats().size == 0


def test_lru_cache_evicts_least_recently_used() -> None:
    cache: LRUCache[str, int] = LRUCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    assert cache.get("a") == 1
    cache.put("c", 3)
    assert "a" in cache and "c" in cache
    assert "b" not in cache
    with pytest.raises(ValueError):
        LRUCache(0)
