"""Classify directory entries into category buckets by filename suffix.

Rules are tested top to bottom and the first match wins, so compound
suffixes (".template.json") sit above the short ones they end with (".json").

    .pyi            ignored (type stubs are never data)
    .template.json  TEMPLATE
    .snapshot.json  SNAPSHOT
    .json           EXISTING
    .template.hy    DYNAMIC_SCRIPT_TEMPLATE  (only with Hy available)
    .template.py    SCRIPT_TEMPLATE
    .hy             DYNAMIC_SCRIPT           (only with Hy available)
    .py             SCRIPT
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from splitjson.models import SUFFIXES, Category, FileKeys

if TYPE_CHECKING:
    from collections.abc import Iterable

DECLARATION_SUFFIX = ".pyi"


@dataclass(frozen=True)
class SuffixRule:
    suffix: str
    category: Category | None           # None = excluded
    requires_dynamic: bool = False

    def matches(self, name: str, dynamic: bool) -> bool:
        if self.requires_dynamic and not dynamic:
            return False
        return name.endswith(self.suffix) and len(name) > len(self.suffix)

    def key(self, name: str) -> str:
        return name[: -len(self.suffix)]


RULES: tuple[SuffixRule, ...] = (
    SuffixRule(DECLARATION_SUFFIX, None),
    SuffixRule(SUFFIXES[Category.TEMPLATE], Category.TEMPLATE),
    SuffixRule(SUFFIXES[Category.SNAPSHOT], Category.SNAPSHOT),
    SuffixRule(SUFFIXES[Category.EXISTING], Category.EXISTING),
    SuffixRule(SUFFIXES[Category.DYNAMIC_SCRIPT_TEMPLATE], Category.DYNAMIC_SCRIPT_TEMPLATE, requires_dynamic=True),
    SuffixRule(SUFFIXES[Category.SCRIPT_TEMPLATE], Category.SCRIPT_TEMPLATE),
    SuffixRule(SUFFIXES[Category.DYNAMIC_SCRIPT], Category.DYNAMIC_SCRIPT, requires_dynamic=True),
    SuffixRule(SUFFIXES[Category.SCRIPT], Category.SCRIPT),
)


def classify_name(name: str, *, dynamic: bool = False) -> tuple[Category, str] | None:
    """Return (category, key) for a file name, or None when it is not a data file."""
    for rule in RULES:
        if rule.requires_dynamic and not dynamic:
            continue
        if name == rule.suffix:
            return None
        if rule.matches(name, dynamic):
            if rule.category is None:
                return None
            return rule.category, rule.key(name)
    return None


def classify(
    names: Iterable[str],
    default_keys: Iterable[str] = (),
    *,
    dynamic: bool = False,
) -> FileKeys:
    """Group file names into buckets. DEFAULT comes from default_keys, not the disk."""
    keys = FileKeys(default=set(default_keys))
    for name in names:
        hit = classify_name(name, dynamic=dynamic)
        if hit is None:
            continue
        category, key = hit
        keys.bucket(category).add(key)
    return keys


def scan(dir_path: Path | str, default_keys: Iterable[str] = (), *, dynamic: bool = False) -> FileKeys:
    """List regular files in dir_path and classify them."""
    names = [p.name for p in Path(dir_path).iterdir() if p.is_file()]
    return classify(names, default_keys, dynamic=dynamic)
