import yaml
from click.testing import CliRunner

from cli.main import cli
from gitreminder.utils import config as cfg


def test_config_prints_effective_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(cfg, "USER_CONFIG_FILE", tmp_path / "config.yaml")
    result = CliRunner().invoke(cli, ["config"])

    assert result.exit_code == 0
    body = yaml.safe_load(result.output)
    assert body["remote_name"] == "origin"
    assert body["push_advice_threshold"] == 2


def test_config_reset_removes_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("remote_name: upstream\n")
    monkeypatch.setattr(cfg, "USER_CONFIG_FILE", path)

    result = CliRunner().invoke(cli, ["config", "--reset"])

    assert result.exit_code == 0
    assert not path.exists()


def test_watch_rejects_missing_directory(tmp_path):
    result = CliRunner().invoke(cli, ["watch", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "Not a directory" in result.output
