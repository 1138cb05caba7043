"""Ownership checks over a classified scan.

A key should have one authoritative file. When several exist the resolver
still picks one deterministically; these diagnostics tell the author which
file to remove.
"""

from __future__ import annotations

from splitjson.models import Diagnostic, FileKeys


def validate_keys(keys: FileKeys) -> list[Diagnostic]:
    """Return diagnostics for ambiguous ownership. Never raises."""
    found: list[Diagnostic] = []
    templated = keys.template | keys.script_template | keys.dynamic_script_template

    for key in sorted(keys.existing & templated):
        found.append(Diagnostic(
            code="template-and-data",
            key=key,
            message=f"Data may be corrupted, {key} presented in both template and data, remove one of them",
        ))

    for key in sorted(keys.script_template & keys.template):
        found.append(Diagnostic(
            code="script-template-shadows-template",
            key=key,
            message=f"Data may be corrupted, {key} presented in both json and py template, py template will be used",
        ))

    for key in sorted(keys.dynamic_script_template & (keys.template | keys.script_template)):
        found.append(Diagnostic(
            code="dynamic-template-shadows-template",
            key=key,
            message=f"Data may be corrupted, {key} presented in several templates, hy template will be used",
        ))

    return found
