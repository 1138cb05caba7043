"""Shared fixtures for splitjson tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def data_dir(tmp_path):
    """An empty data directory."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def put(data_dir):
    """Write a file into data_dir. Non-string content is JSON-encoded."""

    def _put(name, content):
        path = Path(data_dir) / name
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
        return path

    return _put
