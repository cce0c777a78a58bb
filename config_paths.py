import json
import logging
import os

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "cellgrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
PRESET_DEFAULT = "datagrid"
CASE_INSENSITIVE_CHOICES_DEFAULT = False
DROPDOWN_OPTIONS_DEFAULT = None
TAG_SUGGESTIONS_DEFAULT = None


def _string_list(value):
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        cleaned = [item.strip() for item in value if item.strip()]
        return cleaned or None
    return None


def load_config():
    cfg = {
        "PRESET": PRESET_DEFAULT,
        "CASE_INSENSITIVE_CHOICES": CASE_INSENSITIVE_CHOICES_DEFAULT,
        "DROPDOWN_OPTIONS": DROPDOWN_OPTIONS_DEFAULT,
        "TAG_SUGGESTIONS": TAG_SUGGESTIONS_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    preset = data.get("preset")
    if isinstance(preset, str) and preset.strip():
        cfg["PRESET"] = preset.strip()

    case_insensitive = data.get("case_insensitive_choices")
    if isinstance(case_insensitive, bool):
        cfg["CASE_INSENSITIVE_CHOICES"] = case_insensitive

    options = _string_list(data.get("dropdown_options"))
    if options is not None:
        cfg["DROPDOWN_OPTIONS"] = options

    tags = _string_list(data.get("tag_suggestions"))
    if tags is not None:
        cfg["TAG_SUGGESTIONS"] = tags

    return cfg
