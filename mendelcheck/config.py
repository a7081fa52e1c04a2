# File: mendelcheck/config.py
# Location: mendelcheck/mendelcheck/config.py

"""
Configuration management module.

All default values reside in config.json, which is included in the
installed package directory. A user configuration file only needs to list
the keys it overrides; top-level keys replace the packaged defaults.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = os.path.join(os.path.dirname(__file__), "config.json")


def _read_json(config_file: str) -> Dict[str, Any]:
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Configuration file '{config_file}' not found.")

    with open(config_file, "r", encoding="utf-8") as f:
        try:
            config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error parsing JSON configuration: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file '{config_file}' must contain a JSON object.")
    return config


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration, overlaying an optional user file on the defaults.

    Parameters
    ----------
    config_file : str, optional
        Path to a configuration file in JSON format. If None, only the
        package-installed 'config.json' is used.

    Returns
    -------
    dict
        Configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If the specified configuration file does not exist.
    ValueError
        If there is an error parsing the JSON configuration file.
    """
    config = _read_json(DEFAULT_CONFIG_FILE)
    if config_file:
        overrides = _read_json(config_file)
        unknown = sorted(set(overrides) - set(config))
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
        config.update({key: value for key, value in overrides.items() if key in config})
        logger.debug(f"Loaded configuration overrides from {config_file}")
    return config


def get_chromosome_aliases(cfg: Optional[Dict[str, Any]] = None) -> Dict[str, set]:
    """
    Return the configured chromosome aliases as upper-cased lookup sets.

    Parameters
    ----------
    cfg : dict, optional
        Configuration dictionary; the packaged defaults are used when None.

    Returns
    -------
    dict
        Mapping of ``x``, ``y`` and ``mitochondrial`` to sets of contig names.
    """
    if cfg is None:
        cfg = load_config()
    aliases = cfg.get("chromosome_aliases", {})
    return {
        key: {str(name).upper() for name in aliases.get(key, [])}
        for key in ("x", "y", "mitochondrial")
    }


def get_non_sample_columns(cfg: Dict[str, Any]) -> List[str]:
    """Return the table columns that never hold genotypes."""
    return list(cfg.get("non_sample_columns", [])) + list(cfg.get("output_columns", {}).values())
