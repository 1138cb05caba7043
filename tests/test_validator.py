from splitjson.models import FileKeys
from splitjson.validator import validate_keys


class TestValidateKeys:
    def test_clean_scan_has_no_diagnostics(self):
        keys = FileKeys(existing={"user"}, template={"tags"}, script={"price"})
        assert validate_keys(keys) == []

    def test_data_and_json_template(self):
        keys = FileKeys(existing={"tags"}, template={"tags"})
        [d] = validate_keys(keys)
        assert d.code == "template-and-data"
        assert d.key == "tags"
        assert "tags" in d.message

    def test_data_and_script_template(self):
        keys = FileKeys(existing={"rates"}, script_template={"rates"})
        assert [d.code for d in validate_keys(keys)] == ["template-and-data"]

    def test_data_and_dynamic_template(self):
        keys = FileKeys(existing={"rates"}, dynamic_script_template={"rates"})
        assert [d.code for d in validate_keys(keys)] == ["template-and-data"]

    def test_script_template_shadows_json_template(self):
        keys = FileKeys(template={"rates"}, script_template={"rates"})
        [d] = validate_keys(keys)
        assert d.code == "script-template-shadows-template"
        assert "py template will be used" in d.message

    def test_dynamic_template_shadows_other_templates(self):
        keys = FileKeys(template={"a"}, script_template={"b"}, dynamic_script_template={"a", "b"})
        codes = sorted(d.code for d in validate_keys(keys))
        assert codes == ["dynamic-template-shadows-template", "dynamic-template-shadows-template"]

    def test_snapshot_does_not_trigger_warnings(self):
        keys = FileKeys(existing={"a"}, snapshot={"a"})
        assert validate_keys(keys) == []
