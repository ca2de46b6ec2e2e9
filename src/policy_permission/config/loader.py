"""
Permission Naming Rules Loader

Loads naming rules from permission.yaml.

Scalar values may reference environment variables:
- ${VAR_NAME} - Required variable, raises error if not set
- ${VAR_NAME:-default} - Optional variable with default value

Key placeholders such as {action} are never treated as variables. Flags
that come out of interpolation as strings ("false", "no", "0") are parsed
as booleans.

Example:
```yaml
naming_rules:
  key_pattern: "${PERMISSION_KEY_PATTERN:-{action}{delimiter}{subject}}"
  delimiters:
    between_words: "-"
  subject_plural: "${PERMISSION_PLURAL_SUBJECTS:-true}"
```

Set PERMISSION_CONFIG to point at a file outside the searched directories.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

import yaml

from .schema import NamingRules

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:-default}; the default may itself hold {placeholders}
ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-((?:[^{}]|\{[^{}]*\})*))?\}')

CONFIG_FILENAME = "permission.yaml"
CONFIG_PATH_ENV = "PERMISSION_CONFIG"

FLAG_KEYS = frozenset({
    "subject_snake_case",
    "subject_lower_case",
    "subject_plural",
    "action_snake_case",
    "action_lower_case",
    "proxied_action_paste_after",
})

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0", ""}


def interpolate_env_vars(value: str) -> str:
    """
    Expand ${VAR} and ${VAR:-default} references in one value.

    Raises:
        KeyError: If a variable without default is not set
    """
    def replace(match):
        name, default = match.group(1), match.group(2)
        env_value = os.environ.get(name)
        if env_value is not None:
            return env_value
        if default is not None:
            return default
        raise KeyError(
            f"Naming rule references ${{{name}}} but it is not set "
            f"(use ${{{name}:-default}} to make it optional)"
        )

    return ENV_VAR_PATTERN.sub(replace, value)


def _parse_flag(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Naming rule '{key}' must be a boolean, got '{value}'")


def _expand_section(section: Dict[str, Any]) -> Dict[str, Any]:
    # naming_rules and delimiters are mappings of scalars; nothing else nests
    expanded = {}
    for key, value in section.items():
        if isinstance(value, dict):
            value = _expand_section(value)
        elif isinstance(value, str):
            value = interpolate_env_vars(value)
            if key in FLAG_KEYS:
                value = _parse_flag(key, value)
        expanded[key] = value
    return expanded


def load_naming_rules_from_file(
    config_path: Union[str, Path],
    interpolate: bool = True
) -> NamingRules:
    """
    Load naming rules from a YAML file.

    Args:
        config_path: Path to permission.yaml
        interpolate: Whether to expand environment variables (default: True)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the document is not a mapping or a flag is not boolean
        KeyError: If a required environment variable is not set
        yaml.YAMLError: If YAML is malformed
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Naming rules file not found: {config_path}")

    logger.info(f"Loading naming rules from {config_path}")

    with open(config_path, 'r') as f:
        document = yaml.safe_load(f) or {}

    if not isinstance(document, dict):
        raise ValueError(f"{config_path}: expected a mapping, got {type(document).__name__}")

    if interpolate:
        try:
            document = _expand_section(document)
        except (KeyError, ValueError) as e:
            logger.error(f"{config_path}: {e}")
            raise

    return NamingRules.from_dict(document)


def candidate_paths(working_dir: Optional[Union[str, Path]] = None) -> List[Path]:
    """
    Places load_naming_rules looks for permission.yaml, in order:
    $PERMISSION_CONFIG, then <dir>/permission.yaml and
    <dir>/config/permission.yaml for working_dir and the current directory.
    """
    paths = []
    if os.environ.get(CONFIG_PATH_ENV):
        paths.append(Path(os.environ[CONFIG_PATH_ENV]))

    bases = [Path(working_dir)] if working_dir else []
    bases.append(Path.cwd())
    for base in bases:
        for path in (base / CONFIG_FILENAME, base / "config" / CONFIG_FILENAME):
            if path not in paths:
                paths.append(path)
    return paths


def load_naming_rules(
    config_path: Optional[Union[str, Path]] = None,
    working_dir: Optional[Union[str, Path]] = None,
) -> NamingRules:
    """
    Load naming rules from config_path, else the first existing
    candidate_paths() entry, else the defaults.

    Raises:
        FileNotFoundError: If PERMISSION_CONFIG names a missing file
    """
    if config_path:
        return load_naming_rules_from_file(config_path)

    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        # An explicit override must exist; don't silently fall back
        return load_naming_rules_from_file(env_path)

    for path in candidate_paths(working_dir):
        if path.exists():
            return load_naming_rules_from_file(path)

    logger.info(f"No {CONFIG_FILENAME} found, using default naming rules")
    return NamingRules()


def create_default_config(output_path: Optional[Union[str, Path]] = None, overwrite: bool = False) -> Path:
    """
    Write a commented permission.yaml holding the default rules.

    Raises:
        FileExistsError: If the file exists and overwrite is False
    """
    output_path = Path(output_path) if output_path else Path(CONFIG_FILENAME)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"{output_path} already exists")

    default_config = """# Permission naming rules
# Values may use ${VAR_NAME} or ${VAR_NAME:-default}

naming_rules:
  # '{action}{delimiter}{subject}' -> view-any.articles
  # '{subject}{delimiter}{action}' -> articles.view-any
  key_pattern: "{action}{delimiter}{subject}"

  delimiters:
    # ' ' -> view any blog articles
    # '-' -> view-any blog-articles
    between_words: " "
    # ' ' -> view-any blog-articles
    # '.' -> view-any.blog-articles
    between_subject_and_action: " "

  # SuperUser -> super user
  subject_snake_case: true
  subject_lower_case: true
  # super user -> super users
  subject_plural: true

  # viewAny -> view any
  action_snake_case: true
  action_lower_case: true

# manage + own -> "manage own" (true) or "own manage" (false)
proxied_action_paste_after: true
"""

    with open(output_path, 'w') as f:
        f.write(default_config)

    logger.info(f"Created default naming rules at {output_path}")
    return output_path
