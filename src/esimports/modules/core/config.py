"""
Render configuration for the import printer.

Provides:
- RenderConfig dataclass for holding printer options
- load_config() to parse .esimports.json from a project directory
- ESIMPORTS_QUOTE environment override for the quote style
"""

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".esimports.json"
QUOTE_ENV = "ESIMPORTS_QUOTE"

QUOTE_STYLES = {
    "single": "'",
    "double": '"',
}


@dataclass(frozen=True)
class RenderConfig:
    """How import declarations are printed."""

    quote: str = "'"
    semicolons: bool = True

    def __post_init__(self) -> None:
        if self.quote not in QUOTE_STYLES.values():
            raise ValueError(f"Unsupported quote character: {self.quote!r}")
        if not isinstance(self.semicolons, bool):
            raise ValueError(f"semicolons must be true or false, got {self.semicolons!r}")

    @classmethod
    def from_style(cls, style: str, semicolons: bool = True) -> "RenderConfig":
        quote = QUOTE_STYLES.get(style) if isinstance(style, str) else None
        if quote is None:
            valid = ", ".join(sorted(QUOTE_STYLES))
            raise ValueError(f"Unknown quote style '{style}'. Valid styles: {valid}")
        return cls(quote=quote, semicolons=semicolons)


DEFAULT_CONFIG = RenderConfig()


def load_config(project_path: Union[str, Path] = ".") -> RenderConfig:
    """
    Load render configuration from .esimports.json.

    Args:
        project_path: Directory holding the config file

    Returns:
        RenderConfig built from "quote" and "semicolons".
        Returns defaults if the file is missing or invalid.
    """
    config_file = Path(project_path) / CONFIG_FILENAME
    config = DEFAULT_CONFIG

    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as exc:
            # Invalid JSON or read error - keep defaults
            logger.warning("Ignoring unreadable %s: %s", config_file, exc)
            data = {}

        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", config_file)
            data = {}

        style = data.get("quote", "single")
        semicolons = data.get("semicolons", True)
        try:
            config = RenderConfig.from_style(style, semicolons=semicolons)
        except ValueError as exc:
            logger.warning("Ignoring invalid %s: %s", config_file, exc)

    env_style = os.environ.get(QUOTE_ENV)
    if env_style:
        try:
            config = replace(config, quote=RenderConfig.from_style(env_style).quote)
        except ValueError as exc:
            logger.warning("Ignoring %s: %s", QUOTE_ENV, exc)

    return config
