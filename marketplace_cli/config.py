"""
Configuration management for the Marketplace CLI.
"""

import os
import yaml
from dataclasses import dataclass, field, fields
from typing import Dict, Mapping, Optional

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger('config')

OUTPUT_FORMATS = ('table', 'json')


@dataclass
class MarketplaceConfig:
    """Connection settings for the marketplace API."""
    host: str = "gtw.marketplace.cloud.vmware.com"
    api_token: Optional[str] = None  # sent as csp-auth-token
    timeout: float = 60.0  # seconds
    page_size: int = 20
    max_pages: int = 500  # upper bound for the product list loop


@dataclass
class StorageConfig:
    """Object storage used for OVA uploads."""
    bucket: str = "cspmarketplaceprd"
    region: str = "us-west-2"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    default_format: str = "table"
    pretty_json: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    marketplace: MarketplaceConfig = field(default_factory=MarketplaceConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# environment variable -> (section, attribute)
ENVIRONMENT_OVERRIDES = {
    'MKPCLI_HOST': ('marketplace', 'host'),
    'CSP_API_TOKEN': ('marketplace', 'api_token'),
    'MKPCLI_STORAGE_BUCKET': ('storage', 'bucket'),
    'MKPCLI_STORAGE_REGION': ('storage', 'region'),
}


def load_config(config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Load configuration from file, then apply environment overrides.

    Values are not range-checked here; call ``validate_config`` once every
    override, including command line flags, has been applied.

    Args:
        config_path: Optional path to configuration file
        environ: Environment mapping, defaults to os.environ

    Returns:
        Config object with loaded settings

    Raises:
        ConfigurationError: If configuration file is invalid
    """
    config = Config()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration file: {e}") from e

        if config_data:
            if not isinstance(config_data, dict):
                raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
            _update_config_from_dict(config, config_data)
            logger.info(f"Loaded configuration from {config_path}")

    elif config_path:
        logger.warning(f"Configuration file not found: {config_path}")

    _apply_environment(config, os.environ if environ is None else environ)
    return config


def validate_config(config: Config) -> None:
    """
    Check values that would otherwise fail late, in the middle of a command.

    Raises:
        ConfigurationError: If a setting is out of range
    """
    if config.output.default_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Unsupported output format '{config.output.default_format}', "
            f"expected one of: {', '.join(OUTPUT_FORMATS)}"
        )
    if config.marketplace.page_size < 1:
        raise ConfigurationError("marketplace.page_size must be at least 1")
    if config.marketplace.max_pages < 1:
        raise ConfigurationError("marketplace.max_pages must be at least 1")
    if not config.marketplace.host:
        raise ConfigurationError("marketplace.host must not be empty")


def _apply_environment(config: Config, environ: Mapping[str, str]) -> None:
    for variable, (section, attribute) in ENVIRONMENT_OVERRIDES.items():
        value = environ.get(variable)
        if value:
            setattr(getattr(config, section), attribute, value)
            logger.debug(f"Using {variable} for {section}.{attribute}")


# settings that need a numeric value; everything else is taken as written
NUMERIC_SETTINGS = {
    ('marketplace', 'timeout'): float,
    ('marketplace', 'page_size'): int,
    ('marketplace', 'max_pages'): int,
}


def _update_config_from_dict(config: Config, config_data: Dict) -> None:
    """
    Update configuration object from dictionary data.

    Unknown sections and keys are logged and ignored.

    Args:
        config: Config object to update
        config_data: Dictionary with configuration data

    Raises:
        ConfigurationError: If a section is not a mapping or a number does not parse
    """
    for section_name, section_data in config_data.items():
        if section_name not in {f.name for f in fields(config)}:
            logger.warning(f"Ignoring unknown configuration section '{section_name}'")
            continue
        section = getattr(config, section_name)
        if section_data is None:
            continue
        if not isinstance(section_data, dict):
            raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping")

        known = {f.name for f in fields(section)}
        for key, value in section_data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown setting {section_name}.{key}")
                continue

            convert = NUMERIC_SETTINGS.get((section_name, key))
            if convert is not None:
                try:
                    value = convert(value)
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(f"Invalid value for {section_name}.{key}: {value!r}") from e

            setattr(section, key, value)


def get_default_config_path() -> Optional[str]:
    """
    Get the default configuration file path.

    Returns:
        Path to default config file if it exists, None otherwise
    """
    possible_paths = [
        'mkpcli.yaml',
        'mkpcli.yml',
        os.path.expanduser('~/.mkpcli.yaml'),
        os.path.expanduser('~/.mkpcli.yml'),
    ]

    for path in possible_paths:
        if os.path.exists(path):
            return path

    return None
