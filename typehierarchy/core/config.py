import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from typehierarchy.core.validator import ValidationError
from typehierarchy.models.config_model import TypeHierarchyConfig

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "TYPEHIERARCHY_CONFIG"


def load_config(path: Optional[Path] = None) -> TypeHierarchyConfig:
    """Loads the configuration from YAML and applies environment overrides.

    Args:
        path: A YAML config file. Defaults to the file named by the
            TYPEHIERARCHY_CONFIG environment variable, if any.

    Returns:
        TypeHierarchyConfig: The effective configuration.

    Raises:
        ValidationError: If the file or an override holds an invalid value.
    """
    if path is None and os.environ.get(CONFIG_PATH_ENV):
        path = Path(os.environ[CONFIG_PATH_ENV])

    data = {}
    if path is not None:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValidationError(f"Config file {path} must hold a mapping")
        logger.info("Loaded type hierarchy config from %s", path)

    config = TypeHierarchyConfig()
    if 'version' in data:
        config.version = str(data['version'])
    if 'model_cache_size' in data:
        config.model_cache_size = data['model_cache_size']
    if 'log_level' in data:
        config.log_level = data['log_level']
    if data.get('hierarchy_dir'):
        config.hierarchy_dir = Path(data['hierarchy_dir'])
    if 'strict_mode' in data:
        config.strict_mode = bool(data['strict_mode'])

    # Environment variables win over the file
    log_level_env = os.environ.get("TYPEHIERARCHY_LOG_LEVEL")
    if log_level_env:
        config.log_level = log_level_env
    cache_size_env = os.environ.get("TYPEHIERARCHY_MODEL_CACHE_SIZE")
    if cache_size_env:
        config.model_cache_size = cache_size_env
    hierarchy_dir_env = os.environ.get("TYPEHIERARCHY_HIERARCHY_DIR")
    if hierarchy_dir_env:
        config.hierarchy_dir = Path(hierarchy_dir_env)

    try:
        config.model_cache_size = int(config.model_cache_size)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid model_cache_size: {config.model_cache_size}")
    if config.model_cache_size < 1:
        raise ValidationError(f"Invalid model_cache_size: {config.model_cache_size}")

    config.log_level = str(config.log_level).upper()
    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ValidationError(f"Invalid log_level: {config.log_level}")

    return config


def configure_logging(config: TypeHierarchyConfig) -> None:
    """Set up root logging the same way for the CLI and embedding hosts"""
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler()
        ]
    )
