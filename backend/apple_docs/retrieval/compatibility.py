"""Platform, technology, and requirement annotations for documents."""

from __future__ import annotations

import re
from dataclasses import dataclass

from apple_docs.core.logging import get_logger
from apple_docs.models.entities import (
    Compatibility,
    Deprecation,
    Document,
    PlatformInfo,
    TechnologyInfo,
)
from apple_docs.utils.cache import LRUCache

logger = get_logger(__name__)

_IOS_RE = re.compile(r"(?:requires|minimum|ios)\s+ios\s+(\d+(?:\.\d+)?)")
_MACOS_RE = re.compile(r"(?:requires|minimum|macos)\s+macos\s+(\d+(?:\.\d+)?)")
_PROCESSOR_RE = re.compile(r"a(\d+)\s*(?:\(or later\)|processor|chip)")
_XCODE_RE = re.compile(r"(?:requires|minimum)\s+xcode\s+(\d+(?:\.\d+)?)")
_DEVICE_RESTRICTION_RE = re.compile(r"(\d{4}\s+iPads?\s+do not support[^.]*)", re.IGNORECASE)

_SUPERSEDED_PHRASES = (
    "transition away from using",
    "stop doing this",
    "instead, create",
    "instead, use",
    "in its place, use",
)


@dataclass(slots=True)
class CacheStats:
    size: int
    max_size: int


class CompatibilityAnalyzer:
    """Cheap regex/keyword analysis, memoised per document id in a bounded cache."""

    def __init__(self, cache_size: int = 1000) -> None:
        self._cache: LRUCache[str, Compatibility] = LRUCache(cache_size)

    def analyze(self, document: Document) -> Compatibility:
        cached = self._cache.get(document.id)
        if cached is not None:
            return cached
        try:
            compatibility = Compatibility(
                platforms=parse_platforms(document.platforms),
                technologies=parse_technologies(document.technologies),
                requirements=extract_requirements(document.content),
                limitations=extract_limitations(document.content),
                deprecation=detect_deprecation(document.title, document.content),
            )
        except Exception as exc:  # noqa: BLE001 - one bad record must not fail the batch
            logger.error("Compatibility analysis failed for %s: %s", document.id, exc)
            return Compatibility()
        self._cache.put(document.id, compatibility)
        return compatibility

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> CacheStats:
        return CacheStats(size=len(self._cache), max_size=self._cache.capacity)


def parse_platforms(platforms: list[str]) -> PlatformInfo:
    if not platforms:
        return PlatformInfo()
    return PlatformInfo(
        supported=list(platforms),
        count=len(platforms),
        universal=len(platforms) >= 6,
        mobile=any(p in ("iOS", "iPadOS") for p in platforms),
        desktop="macOS" in platforms,
        spatial="visionOS" in platforms,
        watch="watchOS" in platforms,
        tv="tvOS" in platforms,
    )


def parse_technologies(technologies: list[str]) -> TechnologyInfo:
    if not technologies:
        return TechnologyInfo()
    return TechnologyInfo(
        frameworks=list(technologies),
        primary=technologies[0],
        is_modern="SwiftUI" in technologies,
        is_legacy="UIKit" in technologies and "SwiftUI" not in technologies,
        has_ai=any(t in ("Core ML", "Vision", "Speech") for t in technologies),
        has_ar=any(t in ("ARKit", "RealityKit") for t in technologies),
        has_graphics=any(t in ("Metal", "Core Graphics", "SceneKit") for t in technologies),
    )


def extract_requirements(content: str) -> dict[str, object]:
    if not content:
        return {}
    lowered = content.lower()
    requirements: dict[str, object] = {}
    ios_match = _IOS_RE.search(lowered)
    if ios_match:
        requirements["min_ios"] = ios_match.group(1)
    macos_match = _MACOS_RE.search(lowered)
    if macos_match:
        requirements["min_macos"] = macos_match.group(1)
    processor_match = _PROCESSOR_RE.search(lowered)
    if processor_match:
        requirements["min_processor"] = f"A{processor_match.group(1)}"
    if "apple silicon" in lowered or "m1" in lowered or "m2" in lowered:
        requirements["requires_apple_silicon"] = True
    xcode_match = _XCODE_RE.search(lowered)
    if xcode_match:
        requirements["min_xcode"] = xcode_match.group(1)
    return requirements


def extract_limitations(content: str) -> list[dict[str, str]]:
    if not content:
        return []
    lowered = content.lower()
    limitations: list[dict[str, str]] = []
    if "truedepth" in lowered:
        limitations.append(
            {"type": "hardware", "requirement": "TrueDepth camera", "scope": "iPhone X+, iPad Pro 2018+"}
        )
    if "lidar" in lowered:
        limitations.append(
            {"type": "hardware", "requirement": "LiDAR sensor", "scope": "iPhone 12 Pro+, iPad Pro 2020+"}
        )
    if "not available in" in lowered and "simulator" in lowered:
        limitations.append({"type": "simulator", "restriction": "Device only"})
    device_match = _DEVICE_RESTRICTION_RE.search(content)
    if device_match:
        limitations.append({"type": "device_specific", "restriction": device_match.group(1)})
    return limitations


def detect_deprecation(title: str, content: str) -> Deprecation | None:
    if not content:
        return None
    lowered = content.lower()
    lowered_title = title.lower()
    if "this is deprecated" in lowered or "// deprecated" in lowered:
        return Deprecation(status="deprecated", evidence="Direct deprecation statement", confidence="high")
    for phrase in _SUPERSEDED_PHRASES:
        if phrase in lowered:
            return Deprecation(status="superseded", evidence=phrase, confidence="medium")
    if "deprecated" in lowered_title or "migrating" in lowered_title:
        return Deprecation(status="migration_guide", evidence="Migration documentation", confidence="high")
    return None


__all__ = [
    "CompatibilityAnalyzer",
    "CacheStats",
    "parse_platforms",
    "parse_technologies",
    "extract_requirements",
    "extract_limitations",
    "detect_deprecation",
]
