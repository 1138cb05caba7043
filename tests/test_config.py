import pytest

from splitjson.adapter import SplitJSONAdapter
from splitjson.config import init_config, load_config
from splitjson.probe import probe_dynamic_loader, resolve_dynamic


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path):
        cfg = load_config(tmp_path)
        assert cfg.root == tmp_path
        assert cfg.data_dir == tmp_path / "data"
        assert cfg.indent == 4
        assert cfg.export_name == "default"
        assert cfg.dynamic == "auto"
        assert cfg.defaults == {}

    def test_reads_store_and_defaults(self, tmp_path):
        (tmp_path / "splitjson.toml").write_text(
            '[store]\ndir = "db"\nindent = 2\nexport_name = "DATA"\ndynamic = false\n\n'
            '[defaults]\n__session = []\nuser = { id = 0 }\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.data_dir == tmp_path / "db"
        assert cfg.indent == 2
        assert cfg.export_name == "DATA"
        assert cfg.dynamic is False
        assert cfg.defaults == {"__session": [], "user": {"id": 0}}

    def test_searches_upward(self, tmp_path):
        (tmp_path / "splitjson.toml").write_text('[store]\ndir = "db"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert load_config(nested).root == tmp_path

    def test_rejects_bad_dynamic(self, tmp_path):
        (tmp_path / "splitjson.toml").write_text('[store]\ndynamic = "maybe"\n')
        with pytest.raises(ValueError, match="dynamic"):
            load_config(tmp_path)

    def test_adapter_from_config(self, tmp_path):
        (tmp_path / "splitjson.toml").write_text('[store]\nindent = 2\ndynamic = false\n\n[defaults]\nuser = {}\n')
        cfg = load_config(tmp_path)
        cfg.ensure_dirs()
        adapter = SplitJSONAdapter.from_config(cfg)

        assert adapter.read() == {"user": {}}
        adapter.write({"user": {"id": 1}})
        assert (cfg.data_dir / "user.json").read_text() == '{\n  "id": 1\n}'


class TestInitConfig:
    def test_writes_loadable_file(self, tmp_path):
        path = init_config(tmp_path, data_dir="store")
        assert path.exists()
        assert load_config(tmp_path).data_dir == tmp_path / "store"

    def test_refuses_to_overwrite(self, tmp_path):
        init_config(tmp_path)
        with pytest.raises(FileExistsError):
            init_config(tmp_path)


class TestProbe:
    def test_probe_never_raises(self):
        assert isinstance(probe_dynamic_loader(), bool)

    def test_explicit_settings(self):
        assert resolve_dynamic(True) is True
        assert resolve_dynamic(False) is False
        assert resolve_dynamic("auto") == probe_dynamic_loader()

    def test_probe_reports_missing_module(self, monkeypatch):
        monkeypatch.setattr("splitjson.probe.DYNAMIC_LOADER_MODULE", "splitjson_no_such_module")
        assert probe_dynamic_loader() is False

    def test_bad_setting(self):
        with pytest.raises(ValueError):
            resolve_dynamic("sometimes")
