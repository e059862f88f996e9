"""Tests for relationship classification."""

import pytest

from apple_docs.models.entities import Relationship
from apple_docs.retrieval.relationships import classify_relationship, is_api_reference

THREE_BLOCKS = "```swift\nlet a = 1\n```\ntext\n```swift\nlet b = 2\n```\ntext\n```swift\nlet c = 3\n```"


@pytest.mark.parametrize(
    ("title", "content", "main_titles", "query", "expected"),
    [
        ("Migrating to SwiftUI", "", [], "", Relationship.MIGRATION_GUIDE),
        ("RealityKit entities", "", ["SceneKit nodes"], "", Relationship.MODERN_ALTERNATIVE),
        ("Improving render performance", "", [], "", Relationship.PERFORMANCE_GUIDE),
        ("Building a sample app", "", [], "", Relationship.CODE_EXAMPLE),
        ("Metal shaders", "", [], "RealityKit materials", Relationship.LOW_LEVEL_IMPLEMENTATION),
        ("Entity", "struct Entity {}\nclass Scene {}", [], "", Relationship.API_REFERENCE),
        ("Windows on visionOS", "", [], "", Relationship.PLATFORM_SPECIFIC),
        ("Accessibility labels", "Plain prose.", [], "", Relationship.RELATED_TOPIC),
    ],
)
def test_each_rule(title, content, main_titles, query, expected) -> None:
    assert classify_relationship(title, content, main_titles, query) is expected


def test_first_matching_rule_wins() -> None:
    # migration title beats an API-reference body
    assert classify_relationship("Bringing your app to visionOS", THREE_BLOCKS, [], "") is Relationship.MIGRATION_GUIDE


def test_modern_alternative_needs_matching_main_title() -> None:
    assert classify_relationship("RealityKit entities", "", ["Core Data"], "") is Relationship.RELATED_TOPIC


def test_is_api_reference() -> None:
    assert is_api_reference(THREE_BLOCKS)
    assert is_api_reference("protocol A {}\nenum B {}")
    assert not is_api_reference("struct Only {}")


def test_classification_is_total() -> None:
    titles = ["", "Overview", "iOS apps", "Sample code", "Optimizing"]
    contents = ["", "text", THREE_BLOCKS]
    labels = {
        classify_relationship(title, content, ["UIKit views"], "swiftui")
        for title in titles
        for content in contents
    }
    assert labels <= set(Relationship)
    assert Relationship.RELATED_TOPIC in labels
