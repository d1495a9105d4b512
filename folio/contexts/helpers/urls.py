"""URL helpers."""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from folio.contexts.helpers.context import HelperContext
from folio.contexts.helpers.registry import HelperDescriptor


def _strip_querystring_factory(context: HelperContext):
    def strip_querystring(url: str) -> str:
        return url.split("?", 1)[0]

    return strip_querystring


def _set_url_query_param_factory(context: HelperContext):
    def set_url_query_param(url: str, key: str, value: str) -> str:
        parts = urlsplit(url)
        query = [(name, current) for name, current in parse_qsl(parts.query, keep_blank_values=True) if name != key]
        query.append((key, str(value)))
        return urlunsplit(parts._replace(query=urlencode(query)))

    return set_url_query_param


HELPERS = [
    HelperDescriptor("stripQuerystring", _strip_querystring_factory),
    HelperDescriptor("setURLQueryParam", _set_url_query_param_factory),
]
