"""
Rendering Context

Responsibilities:
- Stores theme partials (raw source or precompiled artifacts)
- Precompiles templates and restores precompiled artifacts
- Renders partials and template strings, applying decorators
- Reports a typed error for every failure phase

Owns: Template store, artifact format, render pipeline, error taxonomy
Never: Implements individual helpers
"""

from folio.contexts.rendering.config import RendererConfig, load_renderer_config
from folio.contexts.rendering.exceptions import (
    CompileError,
    DecoratorError,
    ErrorKind,
    FormatError,
    RenderError,
    RendererError,
    TemplateNotFoundError,
)
from folio.contexts.rendering.loader import load_template_sources
from folio.contexts.rendering.renderer import Renderer

__all__ = [
    # Facade
    "Renderer",
    "RendererConfig",
    "load_renderer_config",
    "load_template_sources",
    # Error taxonomy
    "ErrorKind",
    "RendererError",
    "CompileError",
    "FormatError",
    "RenderError",
    "DecoratorError",
    "TemplateNotFoundError",
]
