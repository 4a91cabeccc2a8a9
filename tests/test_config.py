import yaml

from gitreminder.utils import config as cfg


def test_user_config_overrides_defaults(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({
        "remote_name": "upstream",
        "sync_timeout": 10,
        "push_advice_threshold": 3,
        "guard_overlapping_scans": True,
    }))
    monkeypatch.setattr(cfg, "USER_CONFIG_FILE", path)

    cfg.load_user_config()

    assert cfg.REMOTE_NAME == "upstream"
    assert cfg.SYNC_TIMEOUT == 10.0
    assert cfg.PUSH_ADVICE_THRESHOLD == 3
    assert cfg.GUARD_OVERLAPPING_SCANS is True
    assert cfg.DEBOUNCE_DELAY == 0.3


def test_wrong_types_are_ignored(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({
        "remote_name": 42,
        "sync_timeout": True,
        "push_advice_threshold": "many",
    }))
    monkeypatch.setattr(cfg, "USER_CONFIG_FILE", path)

    cfg.load_user_config()

    assert cfg.REMOTE_NAME == "origin"
    assert cfg.SYNC_TIMEOUT == 6.0
    assert cfg.PUSH_ADVICE_THRESHOLD == 2


def test_broken_yaml_keeps_defaults(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("remote_name: [unclosed\n")
    monkeypatch.setattr(cfg, "USER_CONFIG_FILE", path)

    cfg.load_user_config()

    assert cfg.REMOTE_NAME == "origin"


def test_override_skips_unset_values():
    cfg.override(remote_name=None, sync_timeout=2)
    assert cfg.REMOTE_NAME == "origin"
    assert cfg.SYNC_TIMEOUT == 2.0


def test_save_then_reset(tmp_path, monkeypatch):
    path = tmp_path / "nested" / "config.yaml"
    monkeypatch.setattr(cfg, "USER_CONFIG_FILE", path)

    cfg.save_user_config({"debounce_delay": 1.5})
    assert yaml.safe_load(path.read_text())["debounce_delay"] == 1.5
    assert cfg.DEBOUNCE_DELAY == 1.5

    cfg.reset_to_defaults()
    assert not path.exists()
    assert cfg.get_editable_settings()["debounce_delay"] == 0.3


def test_out_of_range_values_are_ignored(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({
        "remote_name": "  ",
        "sync_timeout": -1,
        "debounce_delay": 0,
        "push_advice_threshold": 1,
    }))
    monkeypatch.setattr(cfg, "USER_CONFIG_FILE", path)

    cfg.load_user_config()

    assert cfg.REMOTE_NAME == "origin"
    assert cfg.SYNC_TIMEOUT == 6.0
    assert cfg.DEBOUNCE_DELAY == 0.3
    assert cfg.PUSH_ADVICE_THRESHOLD == 2


def test_override_rejects_non_positive_timeout():
    cfg.override(sync_timeout=0)
    assert cfg.SYNC_TIMEOUT == 6.0
