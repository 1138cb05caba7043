"""Read and write a record store split into one file per top-level key.

SplitJSONAdapter is the public API and plugs into any document store that
only needs read()/write(data):

    adapter = SplitJSONAdapter("/path/to/data", default_value={"__session": []})
    db = adapter.read()
    db["user"]["money"] += 1
    adapter.write(db)

Read precedence per key (first match wins):

    <key>.hy  >  <key>.py  >  <key>.snapshot.json  >  <key>.json
      >  <key>.template.hy  >  <key>.template.py  >  <key>.template.json
      >  default_value[key]

Writes skip script-backed keys (.py / .hy are read-only), send templated
keys to <key>.snapshot.json, and everything else to <key>.json. Templates
are never modified.

Every call rescans the directory; nothing is cached between calls.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from splitjson.classifier import classify_name, scan
from splitjson.loader import HyModuleSource, ModuleSource, ScriptModuleSource, normalize
from splitjson.models import CODE_CATEGORIES, Category, Diagnostic, FileKeys, filename_for
from splitjson.probe import resolve_dynamic
from splitjson.validator import validate_keys

if TYPE_CHECKING:
    from collections.abc import Callable

    from splitjson.config import StoreConfig

logger = logging.getLogger("splitjson.adapter")

_UNSET: Any = object()


def default_serialize(value: Any, indent: int = 4) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def default_deserialize(text: str) -> Any:
    return json.loads(text)


class SplitJSONAdapter:
    """Storage adapter over a directory of per-key JSON, template, snapshot and script files."""

    def __init__(
        self,
        dir_path: Path | str,
        *,
        default_value: Mapping[str, Any] = _UNSET,
        serialize: Callable[[Any], str] | None = None,
        deserialize: Callable[[str], Any] | None = None,
        dynamic: bool | str | None = None,
        export_name: str = "default",
    ) -> None:
        if default_value is _UNSET:
            default_value = {}
        if default_value is None:
            msg = "default value cannot be None"
            raise TypeError(msg)
        if isinstance(default_value, (list, tuple)):
            msg = "default value cannot be a list"
            raise TypeError(msg)
        if not isinstance(default_value, Mapping):
            msg = f"default value must be a mapping, got {type(default_value).__name__}"
            raise TypeError(msg)

        self.dir_path = Path(dir_path)
        self.default_value: Mapping[str, Any] = default_value
        self.serialize: Callable[[Any], str] = serialize or default_serialize
        self.deserialize: Callable[[str], Any] = deserialize or default_deserialize
        self.dynamic = resolve_dynamic(dynamic)
        self.sources: dict[Category, ModuleSource] = {
            Category.SCRIPT: ScriptModuleSource(export_name),
            Category.SCRIPT_TEMPLATE: ScriptModuleSource(export_name),
            Category.DYNAMIC_SCRIPT: HyModuleSource(export_name),
            Category.DYNAMIC_SCRIPT_TEMPLATE: HyModuleSource(export_name),
        }
        self.last_diagnostics: list[Diagnostic] = []

    @classmethod
    def from_config(cls, cfg: StoreConfig) -> SplitJSONAdapter:
        indent = cfg.indent
        return cls(
            cfg.data_dir,
            default_value=cfg.defaults,
            serialize=lambda value: default_serialize(value, indent=indent),
            dynamic=cfg.dynamic,
            export_name=cfg.export_name,
        )

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def read_keys(self) -> FileKeys:
        """Scan the directory (creating it if needed) and bucket every key."""
        self.dir_path.mkdir(parents=True, exist_ok=True)
        return scan(self.dir_path, self.default_value.keys(), dynamic=self.dynamic)

    def validate_keys(self, keys: FileKeys) -> list[Diagnostic]:
        """Run ownership checks and log each finding as a warning."""
        diagnostics = validate_keys(keys)
        for d in diagnostics:
            logger.warning("%s", d.message)
        self.last_diagnostics = diagnostics
        return diagnostics

    def _scan(self) -> FileKeys:
        keys = self.read_keys()
        self.validate_keys(keys)
        return keys

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _path(self, category: Category, key: str) -> Path:
        return self.dir_path / filename_for(category, key)

    def source_for(self, key: str, keys: FileKeys) -> Path | None:
        """File that backs key on read, or None when it comes from default_value."""
        category = keys.category_of(key)
        if category is Category.DEFAULT:
            return None
        return self._path(category, key)

    def target_for(self, key: str, keys: FileKeys) -> Path | None:
        """File a write of key goes to, or None when key is read-only."""
        if keys.is_read_only(key):
            return None
        if keys.is_copy_on_write(key):
            return self._path(Category.SNAPSHOT, key)
        return self._path(Category.EXISTING, key)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _load(self, category: Category, key: str) -> Any:
        path = self._path(category, key)
        if category in CODE_CATEGORIES:
            value = self.sources[category].load(path)
            return normalize(value, self.serialize, self.deserialize)
        return self.deserialize(path.read_text(encoding="utf-8"))

    def read(self) -> dict[str, Any]:
        """Resolve every key in the universe to exactly one value."""
        keys = self._scan()
        result: dict[str, Any] = {}
        for key in keys.merged():
            category = keys.category_of(key)
            if category is Category.DEFAULT:
                result[key] = self.default_value.get(key)
            else:
                result[key] = self._load(category, key)
        logger.debug("read %d keys from %s", len(result), self.dir_path)
        return result

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def _write_file(self, path: Path, value: Any) -> None:
        """Write serialized value to a tmp file, then rename over path."""
        text = self.serialize(value)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(path)

    def write(self, data: Mapping[str, Any]) -> None:
        """Persist each top-level key of data to its own file."""
        keys = self._scan()
        written = 0
        for key, value in data.items():
            target = self.target_for(key, keys)
            if target is None:
                logger.debug("skipping read-only key %s", key)
                continue
            hit = classify_name(target.name, dynamic=self.dynamic)
            if hit is None or hit[1] != key:
                logger.warning("skipping key %r, its file %s would belong to another key", key, target.name)
                continue
            self._write_file(target, value)
            written += 1
        logger.debug("wrote %d of %d keys to %s", written, len(data), self.dir_path)
