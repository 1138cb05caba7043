"""Execute script files and return their exported value.

Every load compiles the file from source into a fresh module object that is
never registered in sys.modules and never written to __pycache__, so edits
to a script are visible on the next read.

    # user.py
    default = {"id": 0, "money": 10}

    ;; tags.template.hy
    (setv default [{"id" 1}])
"""

from __future__ import annotations

import importlib.machinery
import types
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_EXPORT = "default"

_NOT_DATA = (types.FunctionType, types.BuiltinFunctionType, types.MethodType, types.ModuleType, type)


class ModuleSource(Protocol):
    def load(self, path: Path) -> Any: ...


class ScriptModuleSource:
    """Loads Python files."""

    def __init__(self, export_name: str = DEFAULT_EXPORT) -> None:
        self.export_name = export_name

    def _prepare(self) -> None:
        """Hook for dialects that must register a compiler first."""

    def load(self, path: Path) -> Any:
        self._prepare()
        path = Path(path)
        name = f"splitjson_script_{uuid.uuid4().hex[:8]}"
        loader = importlib.machinery.SourceFileLoader(name, str(path))
        code = loader.source_to_code(path.read_bytes(), str(path))

        module = types.ModuleType(name)
        module.__file__ = str(path)
        module.__loader__ = loader
        exec(code, module.__dict__)  # noqa: S102

        if not hasattr(module, self.export_name):
            msg = f"{path} does not define {self.export_name!r}"
            raise AttributeError(msg)
        return getattr(module, self.export_name)


class HyModuleSource(ScriptModuleSource):
    """Loads Hy files. Importing hy patches SourceFileLoader to compile .hy sources."""

    def _prepare(self) -> None:
        import hy  # noqa: F401


def strip_non_data(value: Any) -> Any:
    """Drop functions, classes, modules and cyclic references nested in containers.

    Top-level callables become None. Tuples and sets become lists.
    """
    return _strip(value, set())


def _strip(value: Any, parents: set[int]) -> Any:
    if isinstance(value, _NOT_DATA):
        return None
    if not isinstance(value, (dict, list, tuple, set, frozenset)):
        return value

    parents = parents | {id(value)}

    def keep(v: Any) -> bool:
        return not isinstance(v, _NOT_DATA) and id(v) not in parents

    if isinstance(value, dict):
        return {k: _strip(v, parents) for k, v in value.items() if keep(v)}
    return [_strip(v, parents) for v in value if keep(v)]


def normalize(value: Any, serialize: Callable[[Any], str], deserialize: Callable[[str], Any]) -> Any:
    """Round-trip a script export through the serialization pair so it is plain data."""
    return deserialize(serialize(strip_non_data(value)))
