import yaml
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gedcom_fan.yml"


class GFConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.pipeline = data.get("pipeline", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.extraction = data.get("extraction", {}) or {}
        self.hierarchy = data.get("hierarchy", {}) or {}
        self.debug = data.get("debug", False)

    @property
    def substitute_events(self) -> bool:
        return bool(self.extraction.get("substitute_events", False))


def load_config(path=None) -> 'GFConfig':
    """
    Read the YAML configuration file.

    A missing file is not an error: every section falls back to its defaults.
    """
    config_path = Path(path) if path is not None else CONFIG_PATH
    if not config_path.exists():
        return GFConfig({})

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GFConfig(data)


_config_cache = None


def get_config() -> 'GFConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
