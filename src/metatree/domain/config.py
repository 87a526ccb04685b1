from __future__ import annotations

"""
Configuration Domain Management.

Handles the dict-based runtime configuration of the tree renderer and its
persistence as JSON in the user data directory, with default fallback for
missing or corrupted files.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from metatree.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_DIRECTORY_STYLE,
    DEFAULT_FILE_STYLE,
)
from metatree.domain.tree_models import TreeOptions
from metatree.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Size display
        "show_file_size": True,
        "show_directory_size": True,

        # Visibility
        "list_padding_files": False,

        # Styling
        "use_color": True,
        "directory_style": DEFAULT_DIRECTORY_STYLE,
        "file_style": DEFAULT_FILE_STYLE,

        # Layout (None: unbounded)
        "max_entry_size": None,
    }


def tree_options_from_config(config: Dict[str, Any]) -> TreeOptions:
    """
    Build the renderer option set from a validated configuration.

    Args:
        config: Clean configuration (see validate_config).

    Returns:
        TreeOptions: Immutable renderer options.
    """
    return TreeOptions(
        show_file_size=config["show_file_size"],
        show_directory_size=config["show_directory_size"],
        use_color=config["use_color"],
        list_padding_files=config["list_padding_files"],
        max_entry_size=config["max_entry_size"],
        directory_style=config["directory_style"],
        file_style=config["file_style"],
    )


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def get_config_file() -> str:
    """Resolve the location of the persisted configuration."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Unknown keys are kept so validation can report them; a missing or
    corrupted file yields the defaults.

    Args:
        path: Explicit config file, defaults to the user data directory.

    Returns:
        Dict[str, Any]: Raw (unvalidated) configuration.
    """
    config_file = path or get_config_file()
    config = get_default_config()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Using defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    settings = data.get("tree", {})
    if isinstance(settings, dict):
        config.update(settings)
    else:
        logger.warning("Config section 'tree' is not an object. Using defaults.")

    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the configuration as the 'tree' section of the config file.

    Args:
        config: Configuration to store.
        path: Explicit config file, defaults to the user data directory.
    """
    config_file = path or get_config_file()
    state = {"version": CURRENT_CONFIG_VERSION, "tree": config}
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_file)), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
