import copy
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from dev_autofix.infrastructure.adapters.error_parsing.patterns import (
    FIXABLE_EXTENSIONS, IGNORE_PATHS, MAX_STACK_TRACE_CHARS
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "autofix.yml"

DEFAULT_CONFIG: Dict[str, Any] = {
    'runner': {
        'quiet_period_ms': 500,
        'debounce_ms': 2000,
        'cooldown_ms': 10000,
        'per_key_debounce': False,
        'max_buffer_chars': 20000,
        'force_color': True,
        'read_chunk_size': 4096,
    },
    'detection': {
        'fixable_extensions': list(FIXABLE_EXTENSIONS),
        'ignore_paths': list(IGNORE_PATHS),
        'max_stack_trace_chars': MAX_STACK_TRACE_CHARS,
    },
    'generation': {
        'llm_provider': 'google_gemini',
        'model_name': 'gemini-1.5-flash-latest',
        'api_key': None,
        'language': 'typescript',
    },
    'ui': {
        'type': 'rich',
        'show_prefix': True,
    },
    'logging': {
        'level': 'WARNING',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'log_file': None,
    },
}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merges override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(project_root: Path, config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads the defaults, overlaid with a YAML file if one is given or found.

    An explicitly requested file must exist; the default autofix.yml is optional.
    """
    explicit = config_path is not None
    absolute_config_path = project_root / (config_path or DEFAULT_CONFIG_FILE)

    if not explicit and not absolute_config_path.exists():
        logger.debug(f"No {DEFAULT_CONFIG_FILE} in {project_root}, using defaults")
        config_data = copy.deepcopy(DEFAULT_CONFIG)
    else:
        logger.debug(f"Attempting to load configuration from: {absolute_config_path}")
        try:
            with open(absolute_config_path, 'r') as f:
                file_data = yaml.safe_load(f) or {}
            if not isinstance(file_data, dict):
                raise ValueError("Configuration file must contain a mapping at the top level.")
            config_data = merge_config(DEFAULT_CONFIG, file_data)
            logger.info(f"Configuration loaded successfully from {absolute_config_path}")
        except FileNotFoundError:
            logger.critical(f"Configuration file not found at {absolute_config_path}")
            sys.exit(1)
        except Exception as err:
            logger.critical(f"Error loading configuration from {absolute_config_path}: {err}", exc_info=True)
            sys.exit(1)

    resolve_path(config_data, project_root, ['logging', 'log_file'])
    return config_data


def resolve_path(config: dict, root: Path, keys: list, default: str | None = None):
    """Helper to get, resolve, and update a path in the config dict."""
    current = config
    for key in keys[:-1]:
        current = current.get(key, {})
        if not isinstance(current, dict):
            logger.warning(f"Config path {'->'.join(keys)} structure invalid.")
            return

    last_key = keys[-1]
    relative_path = current.get(last_key, default)

    if relative_path is not None:
        resolved_path = str((root / relative_path).resolve())
        current[last_key] = resolved_path
        logger.debug(f"Resolved config path '{'.'.join(keys)}': {relative_path} -> {resolved_path}")


def ensure_app_directories(config: dict):
    """Creates the log file directory if file logging is configured."""
    log_file = config.get('logging', {}).get('log_file')
    if not log_file:
        return
    target_dir = Path(log_file).parent
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Ensured directory exists: {target_dir}")
    except OSError as e:
        logger.error(f"Failed to create directory {target_dir}: {e}", exc_info=True)
