"""Translation helpers."""

from typing import Any, Optional

from jinja2.utils import htmlsafe_json_dumps
from markupsafe import Markup

from folio.contexts.helpers.context import HelperContext, Translator
from folio.contexts.helpers.registry import HelperDescriptor


def _require_translator(context: HelperContext, helper_name: str) -> Translator:
    translator = context.get_translator()
    if translator is None:
        raise RuntimeError(f"{helper_name} helper used but no translator is configured")
    return translator


def _lang_factory(context: HelperContext):
    def lang(key: str, **params: Any) -> str:
        return _require_translator(context, "lang").translate(key, params)

    return lang


def _lang_json_factory(context: HelperContext):
    def lang_json(key_filter: Optional[str] = None) -> Markup:
        language = _require_translator(context, "langJson").get_language(key_filter)
        return htmlsafe_json_dumps(language)

    return lang_json


HELPERS = [
    HelperDescriptor("lang", _lang_factory),
    HelperDescriptor("langJson", _lang_json_factory),
]
