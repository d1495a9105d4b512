"""String and number formatting helpers."""

import json
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from jinja2.utils import htmlsafe_json_dumps
from markupsafe import Markup, escape

from folio.contexts.helpers.context import HelperContext
from folio.contexts.helpers.registry import HelperDescriptor

SHORT_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Used when the site settings carry no currency
DEFAULT_CURRENCY = {
    "token": "$",
    "location": "left",
    "decimal_token": ".",
    "decimal_places": 2,
    "thousands_token": ",",
}


def _money_factory(context: HelperContext):
    def money(value: Any) -> str:
        currency = {**DEFAULT_CURRENCY, **(context.site_settings.get("currency") or {})}
        places = int(currency["decimal_places"])

        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"money helper expects a number, got {value!r}") from None

        quantized = amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
        sign = "-" if quantized < 0 else ""
        whole, _, fraction = f"{abs(quantized):.{places}f}".partition(".")

        # Group thousands from the right
        groups = []
        while len(whole) > 3:
            groups.insert(0, whole[-3:])
            whole = whole[:-3]
        groups.insert(0, whole)
        number = currency["thousands_token"].join(groups)
        if places:
            number = f"{number}{currency['decimal_token']}{fraction}"

        if currency["location"] == "right":
            return f"{sign}{number}{currency['token']}"
        return f"{sign}{currency['token']}{number}"

    return money


def _json_factory(context: HelperContext):
    def to_json(value: Any) -> Markup:
        return htmlsafe_json_dumps(value)

    return to_json


def _nl2br_factory(context: HelperContext):
    def nl2br(text: Any) -> Markup:
        return Markup("<br>\n").join(escape(text).splitlines())

    return nl2br


def _pre_factory(context: HelperContext):
    def pre(value: Any) -> Markup:
        return Markup("<pre>{0}</pre>").format(json.dumps(value, indent=4, default=str))

    return pre


def _get_short_month_factory(context: HelperContext):
    def get_short_month(month: Any) -> str:
        index = int(month)
        if not 1 <= index <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month!r}")
        return SHORT_MONTHS[index - 1]

    return get_short_month


def _truncate_factory(context: HelperContext):
    def truncate(text: Any, length: int) -> str:
        return str(text)[: int(length)]

    return truncate


def _to_lower_case_factory(context: HelperContext):
    def to_lower_case(text: Any) -> str:
        return text.lower() if isinstance(text, str) else text

    return to_lower_case


def _concat_factory(context: HelperContext):
    def concat(first: Any, second: Any) -> str:
        return f"{first}{second}"

    return concat


def _join_factory(context: HelperContext):
    def join(items: Iterable[Any], separator: str = " ", limit: Optional[int] = None) -> str:
        items = list(items)
        if limit is not None:
            items = items[: int(limit)]
        return separator.join(str(item) for item in items)

    return join


HELPERS = [
    HelperDescriptor("money", _money_factory),
    HelperDescriptor("json", _json_factory),
    HelperDescriptor("nl2br", _nl2br_factory),
    HelperDescriptor("pre", _pre_factory),
    HelperDescriptor("getShortMonth", _get_short_month_factory),
    HelperDescriptor("truncate", _truncate_factory),
    HelperDescriptor("toLowerCase", _to_lower_case_factory),
    HelperDescriptor("concat", _concat_factory),
    HelperDescriptor("join", _join_factory),
]
