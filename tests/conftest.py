"""
Global Pytest Configuration and Fixtures.

Shared fixtures describe a small annotation vocabulary:

1. A `Breakfast` enum and the annotation types AnnotationA, AnnotationC
   and HasDefaultsAnnotation, all nested in
   `eu.xenit.contentcloud.scribe.poet.AnnotationSpecTest`.
2. The same `@HasDefaultsAnnotation(...)` usage expressed once as a
   declared AnnotationInstance and once as a JSON-style mapping.
"""

import enum
import logging
from typing import Any, Dict

import pytest

from scribe import (
    AnnotationMember,
    AnnotationType,
    Char,
    ClassName,
    Float32,
    Long,
)

POET_PACKAGE = "eu.xenit.contentcloud.scribe.poet"
OUTER = ClassName.get(POET_PACKAGE, "AnnotationSpecTest")

ANNOTATION_A = OUTER.nested_class("AnnotationA")
ANNOTATION_C = OUTER.nested_class("AnnotationC")
HAS_DEFAULTS = OUTER.nested_class("HasDefaultsAnnotation")
BREAKFAST = OUTER.nested_class("Breakfast")

OVERRIDE = ClassName.get("java.lang", "Override")
FLOAT = ClassName.get("java.lang", "Float")
DOUBLE = ClassName.get("java.lang", "Double")


class Breakfast(enum.Enum):
    __java_name__ = f"{POET_PACKAGE}.AnnotationSpecTest.Breakfast"

    WAFFLES = "waffles"
    PANCAKES = "pancakes"


AnnotationA = AnnotationType(ANNOTATION_A)
AnnotationB = AnnotationType(OUTER.nested_class("AnnotationB"))
AnnotationC = AnnotationType(ANNOTATION_C, [AnnotationMember("value")])

HasDefaultsAnnotation = AnnotationType(
    HAS_DEFAULTS,
    [
        AnnotationMember("a", 5),
        AnnotationMember("b", 6),
        AnnotationMember("c", 7),
        AnnotationMember("d", Long(8)),
        AnnotationMember("e", Float32(9.0)),
        AnnotationMember("f", 10.0),
        AnnotationMember(
            "g",
            [Char(0), Char(0xCAFE), Char("z"), Char("€"), Char("ℕ"),
             Char('"'), Char("'"), Char("\t"), Char("\n")],
        ),
        AnnotationMember("h", True),
        AnnotationMember("i", Breakfast.WAFFLES),
        AnnotationMember("j", AnnotationA()),
        AnnotationMember("k", "maple"),
        AnnotationMember("l", AnnotationB.class_name),
        AnnotationMember("m", [1, 2, 3]),
        AnnotationMember("n", [Breakfast.WAFFLES, Breakfast.PANCAKES]),
        AnnotationMember("o"),
        AnnotationMember("p"),
        AnnotationMember("q", AnnotationC(value="foo")),
        AnnotationMember(
            "r",
            [ClassName.get("java.lang", "Byte"), ClassName.get("java.lang", "Short"),
             ClassName.get("java.lang", "Integer"), ClassName.get("java.lang", "Long")],
        ),
    ],
)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def has_defaults_instance():
    """The usage applied to `IsAnnotated`, as a declared AnnotationInstance."""
    return HasDefaultsAnnotation(
        o=Breakfast.PANCAKES,
        p=1701,
        f=11.1,
        m=[9, 8, 1],
        l=OVERRIDE,
        j=AnnotationA(),
        q=AnnotationC(value="bar"),
        r=[FLOAT, DOUBLE],
    )


@pytest.fixture
def has_defaults_mapping() -> Dict[str, Any]:
    """The same usage as a JSON-style mapping, members in source order."""
    return {
        "type": HAS_DEFAULTS.canonical(),
        "members": {
            "o": {"enum": f"{BREAKFAST.canonical()}.PANCAKES"},
            "p": 1701,
            "f": 11.1,
            "m": [9, 8, 1],
            "l": {"class": "java.lang.Override"},
            "j": {"type": ANNOTATION_A.canonical()},
            "q": {"type": ANNOTATION_C.canonical(), "members": {"value": "bar"}},
            "r": [{"class": "java.lang.Float"}, {"class": "java.lang.Double"}],
        },
    }


@pytest.fixture
def taco_description() -> Dict[str, Any]:
    """A JSON declaration description of a small class."""
    return {
        "package": "com.squareup.tacos",
        "type": {
            "kind": "class",
            "name": "Taco",
            "modifiers": ["public", "final"],
            "fields": [
                {
                    "type": "java.util.List<java.lang.String>",
                    "name": "toppings",
                    "modifiers": ["private", "final"],
                }
            ],
            "methods": [
                {
                    "name": "size",
                    "returns": "int",
                    "modifiers": ["public"],
                    "statements": ["return toppings.size()"],
                }
            ],
        },
    }


@pytest.fixture(autouse=True)
def reset_scribe_logger():
    """Undo handler changes made by setup_logging between tests."""
    logger = logging.getLogger("scribe")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate
