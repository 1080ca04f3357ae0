"""
Configuration management for the OVHcloud Data SDK

Named endpoint configurations (config.json) and the per-user context holding
credentials and selected service names (context.json).
"""

from .settings import (
    AllConfig,
    Config,
    EndpointConfig,
    CLI_NAME,
    CONFIG_DIR_ENV,
    DEFAULT_REGION,
    REGION_EU,
    REGION_CA,
    config_dir,
    default_config_path,
    region_configs,
)
from .context import (
    Context,
    Features,
    StoredCredentials,
    HIDDEN_SECRET,
    default_context_path,
)

__all__ = [
    'AllConfig',
    'Config',
    'EndpointConfig',
    'CLI_NAME',
    'CONFIG_DIR_ENV',
    'DEFAULT_REGION',
    'REGION_EU',
    'REGION_CA',
    'config_dir',
    'default_config_path',
    'region_configs',
    'Context',
    'Features',
    'StoredCredentials',
    'HIDDEN_SECRET',
    'default_context_path',
]
