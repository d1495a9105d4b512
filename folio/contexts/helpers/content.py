"""Helpers backed by content regions, theme settings, site settings and scratch storage."""

import json
from typing import Any

from markupsafe import Markup

from folio.contexts.helpers.context import HelperContext
from folio.contexts.helpers.registry import HelperDescriptor

INJECT_STORAGE_KEY = "inject"


def _region_factory(context: HelperContext):
    def region(name: str) -> Markup:
        regions = context.get_content() or {}
        content = regions.get(name, "")
        if isinstance(content, (list, tuple)):
            content = "".join(str(widget) for widget in content)
        return Markup('<div data-content-region="{0}">{1}</div>').format(name, Markup(content))

    return region


def _inject_factory(context: HelperContext):
    def inject(key: str, value: Any) -> str:
        context.storage.setdefault(INJECT_STORAGE_KEY, {})[key] = value
        return ""

    return inject


def _js_context_factory(context: HelperContext):
    def js_context() -> Markup:
        # Double-encoded so the page can JSON.parse a plain string literal
        payload = json.dumps(json.dumps(context.storage.get(INJECT_STORAGE_KEY, {})))
        payload = payload.replace("<", "\\u003c")
        return Markup(f"JSON.parse({payload})")

    return js_context


def _option_factory(context: HelperContext):
    def option(key: str, default: Any = None) -> Any:
        """Look up a theme setting by dotted key (e.g., 'product.show_sku')."""
        value: Any = context.theme_settings
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    return option


def _cdn_url(context: HelperContext, path: str) -> str:
    if path.startswith(("http://", "https://", "//")):
        return path

    cdn_url = (context.site_settings.get("cdn_url") or "").rstrip("/")
    version_id = context.site_settings.get("theme_version_id")
    path = path.lstrip("/")

    if version_id:
        return f"{cdn_url}/stencil/{version_id}/{path}"
    return f"{cdn_url}/{path}"


def _cdn_factory(context: HelperContext):
    def cdn(path: str) -> str:
        return _cdn_url(context, path)

    return cdn


def _stylesheet_factory(context: HelperContext):
    def stylesheet(path: str, **attributes: Any) -> Markup:
        attributes.setdefault("rel", "stylesheet")
        rendered = "".join(
            Markup(' {0}="{1}"').format(name, value) for name, value in attributes.items()
        )
        return Markup('<link data-stencil-stylesheet href="{0}"{1}>').format(
            _cdn_url(context, path), Markup(rendered)
        )

    return stylesheet


HELPERS = [
    HelperDescriptor("region", _region_factory),
    HelperDescriptor("inject", _inject_factory),
    HelperDescriptor("jsContext", _js_context_factory),
    HelperDescriptor("option", _option_factory),
    HelperDescriptor("cdn", _cdn_factory),
    HelperDescriptor("stylesheet", _stylesheet_factory),
]
