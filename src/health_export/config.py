import os
from pathlib import Path

import yaml

CONFIG_ENV_VAR = "HEALTH_EXPORT_CONFIG"

# Present only when running from a source checkout.
SOURCE_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = SOURCE_ROOT / "config" / "health_export.yml"

DEFAULTS = {
    "paths": {"output_dir": "data", "logs_dir": "logs"},
    "export": {"indent": 2, "csv_subdir": "csv", "workouts_subdir": "workouts"},
    "logging": {"level": "INFO", "file": "health_export.log", "rotate": False, "module_files": False},
    "debug": False,
}


class HXConfig:
    def __init__(self, data):
        self.paths = {**DEFAULTS["paths"], **(data.get("paths") or {})}
        self.export = {**DEFAULTS["export"], **(data.get("export") or {})}
        self.logging = {**DEFAULTS["logging"], **(data.get("logging") or {})}
        self.debug = data.get("debug", False)


def is_source_checkout() -> bool:
    return (SOURCE_ROOT / "pyproject.toml").is_file()


def base_dir() -> Path:
    """Directory that relative config paths resolve against."""
    return SOURCE_ROOT if is_source_checkout() else Path.cwd()


def config_path() -> Path:
    env = os.environ.get(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def load_config(path: Path | None = None) -> 'HXConfig':
    path = Path(path) if path is not None else config_path()
    if not path.exists():
        # Installed without the project tree: run on built-in defaults.
        return HXConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return HXConfig(data)

_config_cache = None

def get_config() -> 'HXConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
