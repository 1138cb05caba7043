import pytest

from splitjson.adapter import default_deserialize, default_serialize
from splitjson.loader import ScriptModuleSource, normalize, strip_non_data


class TestStripNonData:
    def test_plain_values_untouched(self):
        value = {"a": [1, "x", None, True, 1.5], "b": {"c": {}}}
        assert strip_non_data(value) == value

    def test_functions_and_classes_removed(self):
        class Thing:
            pass

        value = {"f": len, "g": lambda: 1, "cls": Thing, "keep": 1, "items": [print, 2]}
        assert strip_non_data(value) == {"keep": 1, "items": [2]}

    def test_top_level_function_becomes_none(self):
        assert strip_non_data(len) is None

    def test_cycles_removed(self):
        value = {"name": "root"}
        value["self"] = value
        items = [1]
        items.append(items)
        assert strip_non_data(value) == {"name": "root"}
        assert strip_non_data(items) == [1]

    def test_shared_references_kept(self):
        shared = {"x": 1}
        assert strip_non_data({"a": shared, "b": shared}) == {"a": {"x": 1}, "b": {"x": 1}}


class TestNormalize:
    def test_round_trip_is_identity_for_plain_values(self):
        for value in ({"id": 0, "money": 13}, [{"id": 1}, {"id": 999, "name": "aaaa"}], "text", 1, None, []):
            assert normalize(value, default_serialize, default_deserialize) == value

    def test_tuples_become_lists(self):
        assert normalize({"p": (1, 2)}, default_serialize, default_deserialize) == {"p": [1, 2]}


class TestScriptModuleSource:
    def test_module_is_not_registered(self, tmp_path):
        import sys

        path = tmp_path / "mod.py"
        path.write_text("default = __name__\n")
        name = ScriptModuleSource().load(path)
        assert name not in sys.modules

    def test_exceptions_in_script_propagate(self, tmp_path):
        path = tmp_path / "boom.py"
        path.write_text("raise RuntimeError('boom')\n")
        with pytest.raises(RuntimeError, match="boom"):
            ScriptModuleSource().load(path)

    def test_script_can_read_its_own_path(self, tmp_path):
        path = tmp_path / "here.py"
        path.write_text("from pathlib import Path\ndefault = Path(__file__).name\n")
        assert ScriptModuleSource().load(path) == "here.py"
