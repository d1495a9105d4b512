"""Shared state handed to every helper factory."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Protocol

from jinja2 import Environment


class Translator(Protocol):
    """Translator contract consumed by the renderer and the i18n helpers."""

    def get_locale(self) -> str: ...

    def translate(self, key: str, params: Optional[Dict[str, Any]] = None) -> str: ...

    def get_language(self, key_filter: Optional[str] = None) -> Dict[str, Any]: ...


@dataclass
class HelperContext:
    """
    Global context for helpers, owned by a single Renderer.

    Helpers read settings, the translator and content regions through this object.
    storage is the only field helpers may write to; it lives as long as the renderer
    and is shared by every render on that renderer (not per render).

    Attributes:
        site_settings: Global site settings (currency, cdn_url, ...)
        theme_settings: Theme configuration
        environment: Jinja2 environment the helpers are registered with
        get_translator: Returns the current translator, or None
        get_content: Returns the current content regions
        storage: Scratch space for stateful helpers (e.g., inject/jsContext)
    """

    site_settings: Dict[str, Any]
    theme_settings: Dict[str, Any]
    environment: Environment
    get_translator: Callable[[], Optional[Translator]]
    get_content: Callable[[], Dict[str, Any]]
    storage: Dict[str, Any] = field(default_factory=dict)
