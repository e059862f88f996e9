"""Ordered rule tables for code categorisation and validity filtering."""

from __future__ import annotations

import re
from typing import Callable, Sequence

DEFAULT_CATEGORY = "General"

# First match wins; order matters ("fetch" is both Networking and Data Persistence).
CATEGORY_RULES: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (name, re.compile(pattern, re.IGNORECASE))
    for name, pattern in (
        ("UI Controls", r"button|toggle|slider|picker|textfield|securefield|datepicker|stepper"),
        ("Navigation", r"navigation|routing|link|sheet|popover|alert|actionsheet|tab|sidebar"),
        ("Lists & Collections", r"list|table|collection|grid|foreach|section|row|cell"),
        (
            "State Management",
            r"@state|@binding|@observedobject|@stateobject|@environmentobject|@published|observable",
        ),
        ("Layout", r"vstack|hstack|zstack|grid|geometry|alignment|padding|frame|spacing"),
        (
            "Animations",
            r"animation|transition|spring|easing|keyframe|withanimation|scaleeffect|rotationeffect",
        ),
        ("Networking", r"urlsession|fetch|download|upload|json|codable|api|request|response"),
        ("Data Persistence", r"coredata|fetch|predicate|managedobject|persistent|@fetchrequest|swiftdata"),
        ("Graphics & AR", r"path|shape|canvas|metal|scenekit|realitykit|arkit|vision|core graphics"),
        ("watchOS", r"watchos|complication|clockkit|digital crown"),
        ("visionOS", r"visionos|spatial|immersive|window|volume"),
        ("tvOS", r"tvos|focus|remote|directional"),
        ("System Integration", r"notification|location|camera|contacts|calendar|health|siri|widget"),
        ("Testing", r"test|mock|preview|debug|assert|xctassert"),
        ("Concurrency", r"async|await|task|actor|concurrent|performance|background|queue"),
        ("Accessibility", r"accessibility|voiceover|dynamic type|reduce motion"),
    )
)


def categorize(code: str, title: str, context: str, rules: Sequence[tuple[str, re.Pattern[str]]] = CATEGORY_RULES) -> str:
    text = f"{code} {title} {context}".lower()
    for name, pattern in rules:
        if pattern.search(text):
            return name
    return DEFAULT_CATEGORY


def complexity_bucket(code: str) -> str:
    lines = len(code.split("\n"))
    if lines <= 3:
        return "Simple"
    if lines <= 10:
        return "Medium"
    return "Complex"


_TYPE_DECLARATION_RE = re.compile(r"(class|struct|enum|protocol)\s+\w+.*")
_BARE_IMPORT_RE = re.compile(r"import\s+\w+")
_VARIABLE_RE = re.compile(r"(let|var)\s+\w+")
_ARTIFACT_RES = (re.compile(r",\s*\}"), re.compile(r"\{\s*,"))

MIN_CODE_CHARS = 10
MIN_VARIABLE_CONTEXT_CHARS = 20
MAX_ARTIFACT_RATIO = 0.3


def _too_short(code: str, context: str) -> bool:
    return len(code.strip()) < MIN_CODE_CHARS


def _bare_type_declaration(code: str, context: str) -> bool:
    return bool(_TYPE_DECLARATION_RE.fullmatch(code.strip())) and "{" not in code


def _bare_import(code: str, context: str) -> bool:
    return bool(_BARE_IMPORT_RE.fullmatch(code.strip()))


def _lone_variable(code: str, context: str) -> bool:
    return (
        bool(_VARIABLE_RE.match(code.strip()))
        and len(code.split("\n")) == 1
        and len(context) < MIN_VARIABLE_CONTEXT_CHARS
    )


def _repair_artifacts(code: str, context: str) -> bool:
    artifacts = sum(len(pattern.findall(code)) for pattern in _ARTIFACT_RES)
    return artifacts > len(code.split("\n")) * MAX_ARTIFACT_RATIO


RejectRule = tuple[str, Callable[[str, str], bool]]

VALIDITY_RULES: tuple[RejectRule, ...] = (
    ("too_short", _too_short),
    ("bare_type_declaration", _bare_type_declaration),
    ("bare_import", _bare_import),
    ("lone_variable", _lone_variable),
    ("repair_artifacts", _repair_artifacts),
)


def rejection_reason(code: str, context: str, rules: Sequence[RejectRule] = VALIDITY_RULES) -> str | None:
    """Name of the first rule rejecting the block, or None when it is worth keeping."""
    for name, rejects in rules:
        if rejects(code, context):
            return name
    return None


def is_valid_code_example(code: str, context: str) -> bool:
    return rejection_reason(code, context) is None


__all__ = [
    "CATEGORY_RULES",
    "DEFAULT_CATEGORY",
    "VALIDITY_RULES",
    "categorize",
    "complexity_bucket",
    "rejection_reason",
    "is_valid_code_example",
]
