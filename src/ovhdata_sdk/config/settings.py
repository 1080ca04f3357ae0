"""
Endpoint configuration for the OVH API regions

A configuration names an API endpoint. The built-in regions are always
available; extra ones can be declared in ~/.config/ovhdata-cli/config.json,
which holds either a group of configurations or a single one.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

CLI_NAME = "ovhdata-cli"
CONFIG_DIR_ENV = "OVHDATA_CONFIG_DIR"
CONFIG_FILE_NAME = "config.json"

AUTH_METHOD_OVHAPIV6 = "ovhapiv6"

REGION_EU = "OVH-EU"
REGION_CA = "OVH-CA"
DEFAULT_REGION = REGION_EU
SINGLE_CONFIG_NAME = "default"


def config_dir() -> Path:
    """Directory holding the configuration and context files."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / CLI_NAME


def default_config_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


@dataclass
class EndpointConfig:
    """OVH API v6 endpoint"""
    endpoint_url: str
    create_token_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {'endpoint_url': self.endpoint_url, 'create_token_url': self.create_token_url}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EndpointConfig':
        return cls(endpoint_url=data['endpoint_url'], create_token_url=data['create_token_url'])


@dataclass
class Config:
    """One named configuration"""
    ovhapiv6: EndpointConfig
    auth_method: str = AUTH_METHOD_OVHAPIV6

    TABLE_HEADERS = ('NAME', 'ENDPOINT')

    def to_dict(self) -> Dict[str, Any]:
        return {'auth_method': self.auth_method, 'ovhapiv6': self.ovhapiv6.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        return cls(
            ovhapiv6=EndpointConfig.from_dict(data['ovhapiv6']),
            auth_method=data.get('auth_method', AUTH_METHOD_OVHAPIV6),
        )


def _region_config(host: str) -> Config:
    return Config(ovhapiv6=EndpointConfig(
        endpoint_url=f"https://{host}/1.0",
        create_token_url=f"https://{host}/createToken/?GET=/*&POST=/*&PUT=/*&DELETE=/*",
    ))


def region_configs() -> Dict[str, Config]:
    """Built-in configurations, one per region."""
    return {
        REGION_EU: _region_config("eu.api.ovh.com"),
        REGION_CA: _region_config("ca.api.ovh.com"),
    }


@dataclass
class AllConfig:
    """
    Every known configuration and the name of the one in use

    Attributes:
        current_config_name: Name of the configuration in use
        configs: Configurations by name
        path: File the group is saved to
    """
    current_config_name: str
    configs: Dict[str, Config] = field(default_factory=dict)
    path: Optional[Path] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_json(cls, json_string: str) -> 'AllConfig':
        """
        Parse a group of configurations, or a single one that becomes "default".

        Raises:
            ConfigError: If the JSON is invalid or has an unknown shape
        """
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")

        try:
            if isinstance(data, dict) and 'configs' in data:
                return cls(
                    current_config_name=data['current_config_name'],
                    configs={name: Config.from_dict(value) for name, value in data['configs'].items()},
                )
            single = Config.from_dict(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration format: {e}", "INVALID_FORMAT")

        return cls(current_config_name=SINGLE_CONFIG_NAME, configs={SINGLE_CONFIG_NAME: single})

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'AllConfig':
        """Load configurations from a file"""
        path = Path(file_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}", "FILE_ERROR")

        all_config = cls.from_json(json_string)
        all_config.path = path
        return all_config

    @classmethod
    def load(cls, file_path: Optional[Union[str, Path]] = None) -> 'AllConfig':
        """
        Load the user configurations merged with the built-in regions.

        A missing or unreadable file gives the built-in regions only, with
        the default region selected.
        """
        path = Path(file_path) if file_path else default_config_path()
        defaults = region_configs()

        try:
            loaded = cls.from_file(path)
        except ConfigError as e:
            if path.exists():
                logger.warning(f"Ignoring configuration file {path}: {e}")
            return cls(current_config_name=DEFAULT_REGION, configs=defaults, path=path)

        configs = dict(loaded.configs)
        configs.update(defaults)
        return cls(current_config_name=loaded.current_config_name, configs=configs, path=path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'current_config_name': self.current_config_name,
            'configs': {name: config.to_dict() for name, config in self.configs.items()},
        }

    def save(self, file_path: Optional[Union[str, Path]] = None) -> None:
        """
        Save the configurations as pretty JSON.

        Raises:
            ConfigError: If the file cannot be written
        """
        path = Path(file_path) if file_path else (self.path or default_config_path())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigError(
                f"Unable to save configuration into file {path}: {e}", "SAVE_CONFIG_ERROR"
            )
        logger.debug(f"Configuration saved to {path}")

    def current_config(self) -> Config:
        config = self.configs.get(self.current_config_name)
        if config is None:
            raise ConfigError(
                f"Unable to find any config with name: {self.current_config_name}", "CONFIG_NAME_NOT_FOUND"
            )
        return config

    def get_config(self, name: str) -> Optional[Config]:
        return self.configs.get(name)

    def set_current_config(self, name: str) -> Config:
        """
        Select the configuration in use.

        Raises:
            ConfigError: If no configuration has this name
        """
        if name not in self.configs:
            raise ConfigError(f"Unable to find any config with name: {name}", "CONFIG_NAME_NOT_FOUND")
        self.current_config_name = name
        return self.configs[name]

    def add_config(self, name: str, config: Config) -> None:
        self.configs[name] = config

    def list_configs(self) -> List[str]:
        return sorted(self.configs)
