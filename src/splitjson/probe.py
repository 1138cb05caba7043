"""Detect optional script dialects available in this interpreter."""

from __future__ import annotations

import importlib.util
import logging

logger = logging.getLogger("splitjson.probe")

DYNAMIC_LOADER_MODULE = "hy"


def probe_dynamic_loader() -> bool:
    """True when the Hy compiler can be imported. Never raises."""
    try:
        found = importlib.util.find_spec(DYNAMIC_LOADER_MODULE) is not None
    except (ImportError, ValueError):
        found = False
    if not found:
        logger.debug("%s not available, .hy files will be ignored", DYNAMIC_LOADER_MODULE)
    return found


def resolve_dynamic(setting: bool | str | None) -> bool:
    """Turn a `dynamic` option ("auto", None, True, False) into a flag."""
    if setting is None or setting == "auto":
        return probe_dynamic_loader()
    if isinstance(setting, bool):
        return setting
    msg = f"dynamic must be true, false or \"auto\", got {setting!r}"
    raise ValueError(msg)
