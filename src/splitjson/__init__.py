"""Record store split across one file per top-level key.

Layout:
    data/
        user.json               # plain data, read and written
        tags.template.json      # seed, never written
        tags.snapshot.json      # writes to a templated key land here
        price.py                # `default = ...`, read-only
        rates.template.py       # code-built seed, writes go to rates.snapshot.json
        *.hy / *.template.hy    # same as .py, only when hy is installed
        *.pyi                   # ignored

Every read() and write() rescans the directory, so the files are the single
source of truth.
"""

from splitjson.adapter import SplitJSONAdapter, default_deserialize, default_serialize
from splitjson.classifier import classify, classify_name, scan
from splitjson.config import StoreConfig, init_config, load_config
from splitjson.models import Category, Diagnostic, FileKeys, filename_for
from splitjson.validator import validate_keys

__all__ = [
    "Category",
    "Diagnostic",
    "FileKeys",
    "SplitJSONAdapter",
    "StoreConfig",
    "classify",
    "classify_name",
    "default_deserialize",
    "default_serialize",
    "filename_for",
    "init_config",
    "load_config",
    "scan",
    "validate_keys",
]
