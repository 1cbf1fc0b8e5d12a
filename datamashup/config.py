"""
DataMashup Configuration
Single source of truth for all settings.
Load once at startup, pass to all components.
"""
import copy
import json
import zipfile
from pathlib import Path
from .utils.logger import logger, set_level


# Default config values
DEFAULTS = {
    "archive": {
        "compression": "deflated",
        "compresslevel": None,  # None = zlib default
        "chunk_size_kb": 64
    },
    "mashup": {
        "formula_section": "Section1.m",
        "text_suffixes": [".xml", ".m"]
    },
    "package": {
        "custom_xml_hints": ["customXml", "item"]
    },
    "logging": {
        "level": "INFO"
    }
}

COMPRESSION_METHODS = {
    "stored": zipfile.ZIP_STORED,
    "deflated": zipfile.ZIP_DEFLATED
}


class MashupConfig:
    def __init__(self, config_path: str = None):
        self._config = copy.deepcopy(DEFAULTS)

        if config_path:
            self.config_path = Path(config_path)
        else:
            # Look for config in project root
            self.config_path = Path(__file__).parent.parent / 'datamashup.config.json'

        if self.config_path.exists():
            self._load()
        else:
            logger.debug(f"No config file found at {self.config_path} — using defaults")

        set_level(self.log_level)

    def _load(self):
        """Load and merge config file over defaults"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
            self._deep_merge(self._config, user_config)
            logger.info(f"Loaded config from {self.config_path}")
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e} — using defaults")
        except OSError as e:
            logger.error(f"Failed to load config: {e} — using defaults")

    def get(self, *keys, default=None):
        """
        Get a nested config value by key path.
        e.g. config.get('archive', 'compression')
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    # ── Convenience properties ─────────────────────────────────────────────

    @property
    def compression(self) -> int:
        name = self.get('archive', 'compression', default='deflated')
        if name not in COMPRESSION_METHODS:
            logger.warning(f"Unknown compression '{name}' — using deflated")
            return zipfile.ZIP_DEFLATED
        return COMPRESSION_METHODS[name]

    @property
    def compresslevel(self):
        return self.get('archive', 'compresslevel', default=None)

    @property
    def chunk_size(self) -> int:
        return self.get('archive', 'chunk_size_kb', default=64) * 1024

    @property
    def formula_section(self) -> str:
        return self.get('mashup', 'formula_section', default='Section1.m')

    @property
    def text_suffixes(self) -> tuple:
        return tuple(self.get('mashup', 'text_suffixes', default=['.xml', '.m']))

    @property
    def custom_xml_hints(self) -> tuple:
        return tuple(self.get('package', 'custom_xml_hints', default=['customXml', 'item']))

    @property
    def log_level(self) -> str:
        return self.get('logging', 'level', default='INFO')

    # ── Helpers ────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: dict, override: dict):
        """Merge override into base recursively — modifies base in place"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                MashupConfig._deep_merge(base[key], value)
            else:
                base[key] = value


# Singleton — import this everywhere
config = MashupConfig()

__all__ = ["MashupConfig", "config"]
