import pytest

from superast.config_manager import ConfigManager

ENV_KEYS = [
    "SUPERAST_PRETTY", "SUPERAST_ENTRY_NAME", "SUPERAST_ALLOWED_IMPORTS",
    "SUPERAST_ENTRY_RETURN_TYPE", "SUPERAST_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = ConfigManager()
    assert cfg.pretty is False
    assert cfg.entry_name == "main"
    assert cfg.allowed_imports == ["fmt", "log"]
    assert cfg.entry_return_type == "void"
    assert cfg.log_level == "WARNING"


def test_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        ConfigManager("does/not/exist.yaml")


def test_yaml_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "superast:\n  pretty: true\n  entry_return_type: int\n  allowed_imports: [fmt, strings]\n",
        encoding="utf-8",
    )
    cfg = ConfigManager(str(path))
    assert cfg.pretty is True
    assert cfg.entry_return_type == "int"
    assert cfg.builder_options() == {
        "entry_name": "main",
        "allowed_imports": ["fmt", "strings"],
        "entry_return_type": "int",
    }


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("superast:\n  entry_name: app\n", encoding="utf-8")
    monkeypatch.setenv("SUPERAST_ENTRY_NAME", "main")
    monkeypatch.setenv("SUPERAST_ALLOWED_IMPORTS", "fmt, log ,math")
    monkeypatch.setenv("SUPERAST_LOG_LEVEL", "debug")
    cfg = ConfigManager(str(path))
    assert cfg.entry_name == "main"
    assert cfg.allowed_imports == ["fmt", "log", "math"]
    assert cfg.log_level == "DEBUG"


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert ConfigManager(str(path)).entry_name == "main"


def test_config_yaml_in_working_directory_is_picked_up(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("superast:\n  entry_return_type: int\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert ConfigManager().entry_return_type == "int"
