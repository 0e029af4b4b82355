import pytest

from app.config import PROJECT_ROOT, ScanSettings, db_url, load_config, scan_settings


def test_repo_config_loads():
    cfg = load_config()
    s = scan_settings(cfg)
    assert s.default_scale_cm_per_px == 0.1
    assert s.reference_height_px == 800
    assert s.bmi == 15.0


def test_missing_keys_fall_back_to_defaults():
    assert scan_settings({}) == ScanSettings()
    assert scan_settings({"scan": {"delay_s": 0}}).delay_s == 0.0


@pytest.mark.parametrize("section", [{"default_scale_cm_per_px": 0}, {"timeout_s": -1}, {"delay_s": -0.5}])
def test_invalid_scan_settings_rejected(section):
    with pytest.raises(ValueError):
        scan_settings({"scan": section})


def test_env_override_and_missing_file(tmp_path, monkeypatch):
    path = tmp_path / "alt.yaml"
    path.write_text("scan:\n  timeout_s: 7\n", encoding="utf-8")
    monkeypatch.setenv("GROWTH_TRACKER_CONFIG", str(path))
    assert scan_settings(load_config()).timeout_s == 7.0

    monkeypatch.setenv("GROWTH_TRACKER_CONFIG", str(tmp_path / "nope.yaml"))
    with pytest.raises(FileNotFoundError):
        load_config()


def test_relative_db_path_resolves_under_project_root(tmp_path):
    assert db_url({"paths": {"db_path": "outputs/x.db"}}) == f"sqlite:///{PROJECT_ROOT / 'outputs' / 'x.db'}"
    absolute = tmp_path / "y.db"
    assert db_url({"paths": {"db_path": str(absolute)}}) == f"sqlite:///{absolute}"
