import json
import tempfile
from pathlib import Path

import config_paths


def _with_config(tmp, payload=None, raw=None):
    cfg_dir = Path(tmp) / "cellgrid"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    cfg_path = cfg_dir / "config.json"
    if raw is not None:
        cfg_path.write_text(raw)
    elif payload is not None:
        cfg_path.write_text(json.dumps(payload))
    return cfg_dir, cfg_path


def _load(cfg_dir, cfg_path):
    orig_dir = config_paths.CONFIG_DIR
    orig_json = config_paths.CONFIG_JSON
    try:
        config_paths.CONFIG_DIR = str(cfg_dir)
        config_paths.CONFIG_JSON = str(cfg_path)
        return config_paths.load_config()
    finally:
        config_paths.CONFIG_DIR = orig_dir
        config_paths.CONFIG_JSON = orig_json


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load(*_with_config(tmp))
        assert cfg["PRESET"] == "datagrid"
        assert cfg["CASE_INSENSITIVE_CHOICES"] is False
        assert cfg["DROPDOWN_OPTIONS"] is None
        assert cfg["TAG_SUGGESTIONS"] is None


def test_load_config_reads_json_overrides():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load(
            *_with_config(
                tmp,
                {
                    "preset": "clickup",
                    "case_insensitive_choices": True,
                    "dropdown_options": ["Todo", " Done ", ""],
                    "tag_suggestions": ["Ops"],
                },
            )
        )
        assert cfg["PRESET"] == "clickup"
        assert cfg["CASE_INSENSITIVE_CHOICES"] is True
        assert cfg["DROPDOWN_OPTIONS"] == ["Todo", "Done"]
        assert cfg["TAG_SUGGESTIONS"] == ["Ops"]


def test_load_config_ignores_wrongly_typed_keys():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load(
            *_with_config(
                tmp,
                {
                    "preset": 3,
                    "case_insensitive_choices": "yes",
                    "dropdown_options": ["ok", 1],
                },
            )
        )
        assert cfg["PRESET"] == "datagrid"
        assert cfg["CASE_INSENSITIVE_CHOICES"] is False
        assert cfg["DROPDOWN_OPTIONS"] is None


def test_load_config_ignores_malformed_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load(*_with_config(tmp, raw="{not json"))
        assert cfg["PRESET"] == "datagrid"


def test_load_config_leaves_missing_config_dir_alone():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "cellgrid"
        cfg = _load(cfg_dir, cfg_dir / "config.json")
        assert cfg["PRESET"] == "datagrid"
        assert not cfg_dir.exists()
