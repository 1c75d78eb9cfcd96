import configparser
from pathlib import Path

from klondike.Core import GameConfig
from console_ui.ui_config import LOG_LEVEL_ORDER

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DEFAULT_SETTINGS = {
    "seed": "",
    "log_level": "WARNING",
    "show_controls": "yes",
}

_TRUE_WORDS = ("1", "yes", "true", "on")
_FALSE_WORDS = ("0", "no", "false", "off")


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

    raw_seed = str(data["seed"]).strip()
    try:
        data["seed"] = str(int(raw_seed)) if raw_seed not in ("", "None") else ""
    except ValueError:
        data["seed"] = DEFAULT_SETTINGS["seed"]

    level = str(data["log_level"]).strip().upper()
    if level not in LOG_LEVEL_ORDER:
        level = DEFAULT_SETTINGS["log_level"]
    data["log_level"] = level

    flag = str(data["show_controls"]).strip().lower()
    if flag in _TRUE_WORDS:
        data["show_controls"] = "yes"
    elif flag in _FALSE_WORDS:
        data["show_controls"] = "no"
    else:
        data["show_controls"] = DEFAULT_SETTINGS["show_controls"]
    return data


def load_settings(path=None):
    path = Path(path) if path is not None else SETTINGS_PATH
    if not path.exists():
        return dict(DEFAULT_SETTINGS)
    parser = configparser.ConfigParser()
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error:
        return dict(DEFAULT_SETTINGS)
    if "game" not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser["game"].get(key, default) for key, default in DEFAULT_SETTINGS.items()}
    return _sanitize(raw)


def save_settings(settings, path=None):
    path = Path(path) if path is not None else SETTINGS_PATH
    parser = configparser.ConfigParser()
    parser["game"] = _sanitize(settings)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        parser.write(f)


def game_config(settings) -> GameConfig:
    seed = _sanitize(settings)["seed"]
    return GameConfig(int(seed) if seed else None)
