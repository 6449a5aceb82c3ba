"""
Configuration management for the HSDS client.

Settings are stored as JSON in the user's configuration directory and can be
overridden with environment variables:

    HS_ENDPOINT    - HSDS server URL
    HS_USERNAME    - Username for basic authentication
    HS_PASSWORD    - Password for basic authentication
    HS_TOKEN       - Bearer token (takes precedence over username/password)
    HS_LOG_LEVEL   - Default log level (DEBUG, INFO, WARNING, ...)
    HS_CONFIG_DIR  - Custom configuration directory
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:5101"
DEFAULT_TIMEOUT = 30
DEFAULT_POOL_MAXSIZE = 10
DEFAULT_LOG_LEVEL = "WARNING"
CONFIG_FILE_NAME = "config.json"

ENV_OVERRIDES = {
    "HS_ENDPOINT": "endpoint",
    "HS_USERNAME": "username",
    "HS_PASSWORD": "password",
    "HS_TOKEN": "token",
    "HS_LOG_LEVEL": "log_level",
}


@dataclass
class HsdsConfig:
    """Connection settings for an HSDS server."""
    endpoint: str = DEFAULT_ENDPOINT
    username: str = ""
    password: str = ""
    token: str = ""
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    pool_maxsize: int = DEFAULT_POOL_MAXSIZE
    log_level: str = DEFAULT_LOG_LEVEL

    def is_configured(self) -> bool:
        """Check whether a server endpoint is set."""
        return bool(self.endpoint)

    def has_credentials(self) -> bool:
        """Check whether any credential is configured."""
        return bool(self.token or (self.username and self.password))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HsdsConfig":
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def get_default_config_dir() -> Path:
    """Get the configuration directory, honouring HS_CONFIG_DIR."""
    env_dir = os.environ.get("HS_CONFIG_DIR")
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".hsds_client"


class ConfigManager:
    """
    Loads and persists HsdsConfig.

    Environment variables are applied on top of the stored file every time
    the configuration is read; they are never written back.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else get_default_config_dir()
        self._config: Optional[HsdsConfig] = None

    def get_config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def _load_file(self) -> Dict[str, Any]:
        path = self.get_config_path()
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read config file %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed config file %s", path)
            return {}
        return data

    def _stored(self) -> HsdsConfig:
        return HsdsConfig.from_dict(self._load_file())

    def get(self) -> HsdsConfig:
        """Get the effective configuration (file plus environment)."""
        if self._config is None:
            config = self._stored()
            for env_var, attr in ENV_OVERRIDES.items():
                value = os.environ.get(env_var)
                if value:
                    setattr(config, attr, value)
            self._config = config
        return self._config

    def save(self, config: HsdsConfig) -> None:
        """Write the configuration to disk."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        path = self.get_config_path()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
        # may contain credentials
        os.chmod(path, 0o600)
        self._config = None
        logger.debug("Configuration saved to %s", path)

    def update(self, **kwargs: Any) -> HsdsConfig:
        """Update stored settings and persist them."""
        config = self._stored()
        for key, value in kwargs.items():
            if not hasattr(config, key):
                raise ValueError(f"Unknown configuration key: {key}")
            setattr(config, key, value)
        self.save(config)
        return self.get()

    def clear(self) -> None:
        """Remove the stored configuration file."""
        path = self.get_config_path()
        if path.exists():
            path.unlink()
        self._config = None


_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get the process-wide config manager (a new one when config_dir is given)."""
    global _config_manager
    if config_dir is not None:
        return ConfigManager(config_dir)
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> HsdsConfig:
    """Get the effective configuration from the default config manager."""
    return get_config_manager().get()
