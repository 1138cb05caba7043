"""Data models for the split-file record store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    """Role a file plays for its logical key, encoded by filename suffix."""

    DEFAULT = "default"
    EXISTING = "existing"                          # <key>.json
    TEMPLATE = "template"                          # <key>.template.json
    SCRIPT = "script"                              # <key>.py
    SCRIPT_TEMPLATE = "script_template"            # <key>.template.py
    DYNAMIC_SCRIPT = "dynamic_script"              # <key>.hy
    DYNAMIC_SCRIPT_TEMPLATE = "dynamic_script_template"  # <key>.template.hy
    SNAPSHOT = "snapshot"                          # <key>.snapshot.json


SUFFIXES: dict[Category, str] = {
    Category.EXISTING: ".json",
    Category.TEMPLATE: ".template.json",
    Category.SCRIPT: ".py",
    Category.SCRIPT_TEMPLATE: ".template.py",
    Category.DYNAMIC_SCRIPT: ".hy",
    Category.DYNAMIC_SCRIPT_TEMPLATE: ".template.hy",
    Category.SNAPSHOT: ".snapshot.json",
}

# Read precedence, highest first. DEFAULT is the fallback and never listed.
READ_ORDER: tuple[Category, ...] = (
    Category.DYNAMIC_SCRIPT,
    Category.SCRIPT,
    Category.SNAPSHOT,
    Category.EXISTING,
    Category.DYNAMIC_SCRIPT_TEMPLATE,
    Category.SCRIPT_TEMPLATE,
    Category.TEMPLATE,
)

SCRIPT_CATEGORIES = frozenset({Category.SCRIPT, Category.DYNAMIC_SCRIPT})
TEMPLATE_CATEGORIES = frozenset({
    Category.TEMPLATE,
    Category.SCRIPT_TEMPLATE,
    Category.DYNAMIC_SCRIPT_TEMPLATE,
})
CODE_CATEGORIES = SCRIPT_CATEGORIES | {Category.SCRIPT_TEMPLATE, Category.DYNAMIC_SCRIPT_TEMPLATE}


def filename_for(category: Category, key: str) -> str:
    """Return the file name backing key in category (inverse of suffix stripping)."""
    if category is Category.DEFAULT:
        msg = "default values are not backed by a file"
        raise ValueError(msg)
    return key + SUFFIXES[category]


@dataclass
class FileKeys:
    """Logical keys grouped by category for one directory scan."""

    default: set[str] = field(default_factory=set)
    existing: set[str] = field(default_factory=set)
    template: set[str] = field(default_factory=set)
    script: set[str] = field(default_factory=set)
    script_template: set[str] = field(default_factory=set)
    dynamic_script: set[str] = field(default_factory=set)
    dynamic_script_template: set[str] = field(default_factory=set)
    snapshot: set[str] = field(default_factory=set)

    def bucket(self, category: Category) -> set[str]:
        return getattr(self, category.value)  # type: ignore[no-any-return]

    def buckets(self) -> dict[Category, set[str]]:
        return {c: self.bucket(c) for c in Category}

    def merged(self) -> set[str]:
        """Union of every bucket: the key universe driving read()."""
        universe: set[str] = set()
        for keys in self.buckets().values():
            universe |= keys
        return universe

    def category_of(self, key: str) -> Category:
        """Winning read category for key; DEFAULT when no file backs it."""
        for category in READ_ORDER:
            if key in self.bucket(category):
                return category
        return Category.DEFAULT

    def is_read_only(self, key: str) -> bool:
        return key in self.script or key in self.dynamic_script

    def is_copy_on_write(self, key: str) -> bool:
        """True when writes for key land in <key>.snapshot.json."""
        return (
            key in self.template
            or key in self.script_template
            or key in self.dynamic_script_template
            or key in self.snapshot
        )


@dataclass
class Diagnostic:
    """A non-fatal ownership problem found while validating a scan."""

    code: str       # template-and-data | script-template-shadows-template | ...
    key: str
    message: str

    def __str__(self) -> str:
        return self.message
