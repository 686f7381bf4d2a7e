import json
import os
from pathlib import Path
from typing import Optional
import structlog
import yaml

from .schema import ReservaConfig

logger = structlog.get_logger()

DEFAULT_CONFIG_PATH = 'config.json'

ENV_OVERRIDES = {
    'RESERVA_AIKOTOBA': 'aikotoba',
    'RESERVA_EMAIL': 'email',
    'RESERVA_PASSWORD': 'password',
    'RESERVA_COOKIE': 'cookie',
    'LOG_LEVEL': 'log_level',
}


def load_config(config_path: Optional[str] = None) -> ReservaConfig:
    """Load configuration from a JSON or YAML file with environment variable overrides."""

    # An explicitly requested file has to exist, the default one is optional
    if config_path is None:
        config_path = os.getenv('RESERVA_CONFIG_PATH') or None
    explicit = config_path is not None
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_file = Path(config_path)
    config_data = {}

    if config_file.is_file():
        logger.info("Loading configuration", config_path=config_path)
        config_data = _read_config_file(config_file)
    elif config_file.exists():
        raise ValueError(f"Configuration path is not a file: {config_path}")
    elif explicit:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    for env_var, config_key in ENV_OVERRIDES.items():
        env_value = os.getenv(env_var)
        if env_value:
            config_data[config_key] = env_value
            logger.info("Applied environment override", env_var=env_var, config_key=config_key)

    try:
        config = ReservaConfig(**config_data)
    except Exception as e:
        logger.error("Configuration validation failed", error=str(e))
        raise ValueError(f"Configuration validation failed: {e}")

    logger.info("Configuration loaded successfully",
               credential_mode=config.credential_mode(),
               has_cookie=config.cookie is not None,
               log_level=config.log_level)
    return config


def _read_config_file(config_file: Path) -> dict:
    with open(config_file, 'r') as f:
        try:
            if config_file.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file: {e}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}")
    return data
