import yaml
import logging
import logging.config
from typing import Any, Dict


class ConfigLoader:
    """
    Loads the YAML configuration (feed_settings, indicator_settings, logging).

    An empty file loads as an empty configuration so every section falls
    back to its defaults.
    """
    def __init__(self, config_path: str):
        """Initialize with path to config file."""
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load YAML configuration file."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logging.error(f"Configuration file not found at '{self.config_path}'")
            raise
        except yaml.YAMLError as e:
            logging.error(f"Malformed YAML in configuration file: {e}")
            raise

        if not isinstance(config, dict):
            raise ValueError(f"Top level of '{self.config_path}' must be a mapping, got {type(config).__name__}")
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key with optional default."""
        return self.config.get(key, default)

    def get_section(self, key: str) -> Dict[str, Any]:
        """
        Get a mapping section; a missing or empty section is an empty dict.

        Raises:
            ValueError: If the section exists but is not a mapping.
        """
        section = self.config.get(key) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{key}' must be a mapping, got {type(section).__name__}")
        return dict(section)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to config."""
        return self.config[key]

    def get_all(self) -> Dict[str, Any]:
        """Return entire configuration dictionary."""
        return self.config


def setup_logging(config: Dict[str, Any]) -> None:
    """Configure application logging with fallback to basic config."""
    try:
        logging.config.dictConfig(config)
        logging.info("Logging configured successfully from config file.")
    except (ValueError, TypeError, AttributeError) as e:
        # Malformed or missing dict: plain stderr logging
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logging.warning(f"Could not configure logging from dict: {e}. Using basic config.")
