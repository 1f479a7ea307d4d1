from filebyte_config import CONFIG_HOME_ENV, ConfigManager, FilebyteConfig


def test_missing_config_gives_defaults(tmp_path):
    config = ConfigManager(tmp_path / "cfg").load()

    assert config == FilebyteConfig()
    assert not (tmp_path / "cfg").exists()


def test_save_and_load(tmp_path):
    manager = ConfigManager(tmp_path / "cfg")
    manager.save(FilebyteConfig(size_unit="mb", sort_by="size", color=False))

    loaded = manager.load()

    assert loaded.size_unit == "mb"
    assert loaded.sort_by == "size"
    assert loaded.color is False
    assert loaded.detailed_permissions is True


def test_corrupt_config_falls_back_to_defaults(tmp_path):
    manager = ConfigManager(tmp_path)
    manager.config_file.write_text("{not json")

    assert manager.load() == FilebyteConfig()


def test_environment_selects_config_directory(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_HOME_ENV, str(tmp_path))

    assert ConfigManager().config_file == tmp_path / "config.json"


def test_reset_removes_file(tmp_path):
    manager = ConfigManager(tmp_path)
    manager.save(FilebyteConfig())
    manager.reset()

    assert not manager.config_file.exists()
