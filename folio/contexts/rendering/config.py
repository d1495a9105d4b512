"""
Renderer configuration.

Engine options are read from the YAML file named by RENDERER_CONFIG_PATH and merged
over the RendererConfig schema. Missing keys fall back to the schema defaults.

Example renderer.yaml:
    strict_undefined: true
    autoescape: true
    keep_trailing_newline: true
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
RENDERER_CONFIG_PATH = os.getenv("RENDERER_CONFIG_PATH")


@dataclass
class RendererConfig:
    """
    Jinja2 environment options used by a Renderer.

    Attributes:
        strict_undefined: Raise on undefined variables instead of rendering them empty
        autoescape: HTML-escape variable output
        trim_blocks: Remove the first newline after a block tag
        lstrip_blocks: Strip leading whitespace before a block tag
        keep_trailing_newline: Preserve the final newline of template source
    """

    strict_undefined: bool = False
    autoescape: bool = True
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True

    def environment_options(self) -> Dict[str, Any]:
        """Keyword arguments for jinja2.Environment (excluding undefined)."""
        return {
            "autoescape": self.autoescape,
            "trim_blocks": self.trim_blocks,
            "lstrip_blocks": self.lstrip_blocks,
            "keep_trailing_newline": self.keep_trailing_newline,
        }


def load_renderer_config(config_path: Optional[Path] = None) -> RendererConfig:
    """
    Load renderer configuration from YAML.

    Args:
        config_path: Optional path to config file (defaults to RENDERER_CONFIG_PATH env variable)

    Returns:
        RendererConfig with file values merged over defaults

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        omegaconf.errors.ValidationError: If a value has the wrong type
    """
    schema = OmegaConf.structured(RendererConfig)

    if config_path is None:
        if not RENDERER_CONFIG_PATH:
            return OmegaConf.to_object(schema)
        config_path = Path(RENDERER_CONFIG_PATH)

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Renderer config not found: {config_path}")

    merged = OmegaConf.merge(schema, OmegaConf.load(config_path))
    return OmegaConf.to_object(merged)
