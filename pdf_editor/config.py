"""
Configuration settings for the application.

Values come from the dataclass defaults, then an optional YAML file, then the
environment (a ``.env`` file is loaded first if present).
"""
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv

CONFIG_ENV_VAR = "PDF_EDITOR_CONFIG"
LOG_LEVEL_ENV_VAR = "PDF_EDITOR_LOG_LEVEL"


@dataclass(frozen=True)
class EditorConfig:
    producer: str = "PDF Editor App"
    extraction_title: str = "Extracted Pages"
    concatenation_title: str = "Concatenated PDF"
    split_title: str = "{base} - Page {page}"
    log_level: str = "INFO"
    show_progress: bool = True

    def __post_init__(self):
        # {base} and {page} are the only placeholders split titles may use.
        try:
            self.split_page_title("base", 1)
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid split_title template {self.split_title!r}: {e!r}") from e

    def split_page_title(self, base: str, page: int) -> str:
        return self.split_title.format(base=base, page=page)


def load_config(path: Optional[Union[str, Path]] = None) -> EditorConfig:
    """
    Builds the effective configuration.

    Args:
        path: YAML file to read. Falls back to $PDF_EDITOR_CONFIG when omitted.

    Returns:
        The merged EditorConfig.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        ValueError: If the file is not valid YAML, is not a mapping, names
            unknown settings or carries an unusable split_title.
    """
    load_dotenv()
    config = EditorConfig()

    config_path = path or os.getenv(CONFIG_ENV_VAR)
    if config_path:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in '{config_path}': {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file '{config_path}' must contain a mapping of settings.")

        known = {field.name for field in fields(EditorConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings in '{config_path}': {', '.join(unknown)}")
        config = replace(config, **data)
        logging.getLogger(__name__).debug(f"Configuration loaded from '{config_path}'.")

    env_level = os.getenv(LOG_LEVEL_ENV_VAR)
    if env_level:
        config = replace(config, log_level=env_level)

    return config
