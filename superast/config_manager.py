import os
from typing import Optional

import yaml
from dotenv import load_dotenv

from superast.sema.validator import DEFAULT_ALLOWED_IMPORTS, DEFAULT_ENTRY_NAME

load_dotenv(override=True)

DEFAULT_CONFIG_PATH = "config.yaml"


class ConfigManager:
    """
    Settings from a YAML file (`superast:` section); SUPERAST_* env vars win.

    Without an explicit path, config.yaml in the working directory is used
    when present. An explicit path that does not exist is an error.
    """

    def __init__(self, config_path: Optional[str] = None):
        self._cfg = {}
        if config_path is None:
            if not os.path.exists(DEFAULT_CONFIG_PATH):
                return
            config_path = DEFAULT_CONFIG_PATH
        elif not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path, 'r', encoding='utf-8') as f:
            self._cfg = yaml.safe_load(f) or {}

    def _get(self, key: str, default):
        return self._cfg.get('superast', {}).get(key, default)

    @property
    def pretty(self) -> bool:
        return str(os.getenv("SUPERAST_PRETTY", self._get('pretty', False))).lower() == "true"

    @property
    def entry_name(self) -> str:
        return os.getenv("SUPERAST_ENTRY_NAME", self._get('entry_name', DEFAULT_ENTRY_NAME))

    @property
    def allowed_imports(self) -> list:
        raw = os.getenv("SUPERAST_ALLOWED_IMPORTS", "")
        if raw:
            return [p.strip() for p in raw.split(",") if p.strip()]
        return list(self._get('allowed_imports', DEFAULT_ALLOWED_IMPORTS))

    @property
    def entry_return_type(self) -> str:
        return os.getenv("SUPERAST_ENTRY_RETURN_TYPE", self._get('entry_return_type', 'void'))

    @property
    def log_level(self) -> str:
        return os.getenv("SUPERAST_LOG_LEVEL", self._get('log_level', 'WARNING')).upper()

    def builder_options(self) -> dict:
        return {
            "entry_name": self.entry_name,
            "allowed_imports": self.allowed_imports,
            "entry_return_type": self.entry_return_type,
        }
