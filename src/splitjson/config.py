"""StoreConfig: project-local config for a split JSON store.

Default layout (all relative to the project root):

    splitjson.toml        # project config
    data/                 # one file per top-level key
        user.json
        tags.template.json
        tags.snapshot.json
        price.py

splitjson.toml example:

    [store]
    dir = "data"
    indent = 4
    export_name = "default"   # module attribute read from .py / .hy files
    dynamic = "auto"          # "auto" | true | false: classify .hy files

    [defaults]
    __session = []
    user = {}
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_CONFIG_FILENAME = "splitjson.toml"
_DEFAULT_DATA_DIR = "data"
_DEFAULT_INDENT = 4
_DEFAULT_EXPORT = "default"


@dataclass
class StoreConfig:
    """Resolved configuration for a split JSON store."""

    root: Path                      # directory that contains splitjson.toml
    data_dir: Path = field(default_factory=Path)
    indent: int = _DEFAULT_INDENT
    export_name: str = _DEFAULT_EXPORT
    dynamic: bool | str = "auto"
    defaults: dict[str, Any] = field(default_factory=dict)

    @property
    def config_path(self) -> Path:
        return self.root / _CONFIG_FILENAME

    def ensure_dirs(self) -> None:
        """Create data_dir if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


def _parse_dynamic(raw: Any) -> bool | str:
    if isinstance(raw, bool) or raw == "auto":
        return raw  # type: ignore[no-any-return]
    msg = f"[store] dynamic must be true, false or \"auto\", got {raw!r}"
    raise ValueError(msg)


def load_config(root: Path | str | None = None) -> StoreConfig:
    """Load splitjson.toml from root (or search upward from cwd if root is None)."""
    root_path = _find_root(Path(root) if root else Path.cwd())
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as f:
            raw = tomllib.load(f)

    store_section = raw.get("store", {})
    defaults = raw.get("defaults", {})
    if not isinstance(defaults, dict):
        msg = "[defaults] must be a table"
        raise ValueError(msg)

    return StoreConfig(
        root=root_path,
        data_dir=root_path / store_section.get("dir", _DEFAULT_DATA_DIR),
        indent=int(store_section.get("indent", _DEFAULT_INDENT)),
        export_name=str(store_section.get("export_name", _DEFAULT_EXPORT)),
        dynamic=_parse_dynamic(store_section.get("dynamic", "auto")),
        defaults=dict(defaults),
    )


def _find_root(start: Path) -> Path:
    """Walk upward from start looking for splitjson.toml."""
    for directory in (start, *start.parents):
        if (directory / _CONFIG_FILENAME).exists():
            return directory
    return start


def init_config(root: Path, data_dir: str = _DEFAULT_DATA_DIR) -> Path:
    """Write a default splitjson.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"splitjson.toml already exists at {config_path}"
        raise FileExistsError(msg)

    content = f"""\
[store]
dir = "{data_dir}"
# indent = 4                # default serializer indent
# export_name = "default"   # attribute read from .py / .hy modules
# dynamic = "auto"          # classify .hy files when hy is installed

# Keys that always exist, with their fallback values
[defaults]
"""
    config_path.write_text(content)
    return config_path
