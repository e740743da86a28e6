import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from .treesitter.parser import SOURCE_SUFFIXES

# Default configuration values
DEFAULT_CONFIG_PATH = "component-meta.config.yaml"
DEFAULT_STRICT = False
DEFAULT_SOURCE_EXTENSIONS = list(SOURCE_SUFFIXES)
DEFAULT_INDEX_FILE_NAMES = ["index.ts", "index.js"]
DEFAULT_NAMESPACE_CONSTANTS_PATH = "../../utils/tag-name/constants.ts"
DEFAULT_COMPONENT_FILE_SUFFIX_PATTERN = r"\.component\.(t|j)sx?$"
DEFAULT_IMPORT_MARKER = "components"
DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


class ComponentMetaConfig(BaseModel):
    """
    Central configuration model for component metadata extraction.
    """
    strict: bool = Field(default=DEFAULT_STRICT)
    source_extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_EXTENSIONS))
    index_file_names: List[str] = Field(default_factory=lambda: list(DEFAULT_INDEX_FILE_NAMES))
    namespace_constants_path: str = Field(default=DEFAULT_NAMESPACE_CONSTANTS_PATH)
    component_file_suffix_pattern: str = Field(default=DEFAULT_COMPONENT_FILE_SUFFIX_PATTERN)
    import_marker: str = Field(default=DEFAULT_IMPORT_MARKER)
    log_level: str = Field(default=DEFAULT_LOG_LEVEL)

    # Allow extra fields for flexibility
    class Config:
        extra = "allow"


def load_config(
    config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None
) -> ComponentMetaConfig:
    """
    Load configuration from file and overrides.

    Priority:
    1. Explicit overrides (if provided and not None)
    2. Config File (if provided or found at default path)
    3. Default Values

    Args:
        config_path: Path to the YAML config file. If None, tries 'component-meta.config.yaml'.
        cli_args: Dictionary of values overriding the config file.

    Returns:
        ComponentMetaConfig: The resolved configuration object.
    """
    config_data: Dict[str, Any] = {}

    target_path = config_path if config_path else DEFAULT_CONFIG_PATH
    path_obj = Path(target_path)

    if path_obj.exists() and path_obj.is_file():
        try:
            with open(path_obj, 'r', encoding='utf-8') as f:
                file_data = yaml.safe_load(f)
            if isinstance(file_data, dict):
                config_data.update(file_data)
            elif file_data is not None:
                logger.warning(f"Ignoring config file {target_path}: expected a mapping at the top level")
            logger.info(f"Loaded configuration from {target_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config file {target_path}: {e}")
            config_data = {}
    elif config_path:
        logger.warning(f"Config file not found at explicit path: {config_path}")
    else:
        logger.info(f"No config file found at {DEFAULT_CONFIG_PATH}, using defaults.")

    if cli_args:
        for key, value in cli_args.items():
            if value is not None:
                config_data[key] = value

    return ComponentMetaConfig(**config_data)
