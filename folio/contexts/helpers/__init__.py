"""
Helpers Context

Responsibilities:
- Defines the helper registration contract (HelperDescriptor + factory)
- Owns the HelperContext shared by every helper of a renderer
- Ships the built-in helper library exposed to theme templates

Owns: Helper declaration order, helper context
Never: Looks up or renders templates
"""

from folio.contexts.helpers import arrays, content, formatting, i18n, urls
from folio.contexts.helpers.context import HelperContext, Translator
from folio.contexts.helpers.registry import HelperDescriptor, register_helpers

# Declaration order is registration order
HELPERS = [
    *content.HELPERS,
    *i18n.HELPERS,
    *formatting.HELPERS,
    *arrays.HELPERS,
    *urls.HELPERS,
]

__all__ = [
    "HELPERS",
    "HelperContext",
    "HelperDescriptor",
    "Translator",
    "register_helpers",
]
