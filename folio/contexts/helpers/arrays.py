"""Collection helpers."""

from typing import Any, Iterable, List, Mapping

from folio.contexts.helpers.context import HelperContext
from folio.contexts.helpers.registry import HelperDescriptor


def _matches(item: Any, predicate: Mapping[str, Any]) -> bool:
    return isinstance(item, Mapping) and all(item.get(key) == value for key, value in predicate.items())


def _pluck_factory(context: HelperContext):
    def pluck(items: Iterable[Any], key: str) -> List[Any]:
        return [item.get(key) for item in items if isinstance(item, Mapping)]

    return pluck


def _limit_factory(context: HelperContext):
    def limit(items: Any, count: int) -> Any:
        return items[: int(count)]

    return limit


def _contains_factory(context: HelperContext):
    def contains(container: Any, value: Any) -> bool:
        if container is None:
            return False
        return value in container

    return contains


def _any_factory(context: HelperContext):
    def any_(*values: Any, **predicate: Any) -> bool:
        """
        True if any argument is truthy.

        With keyword arguments and a single list argument, true if any item of the
        list matches every keyword (e.g., any(products, is_featured=true)).
        """
        if predicate and len(values) == 1:
            return any(_matches(item, predicate) for item in values[0] or [])
        return any(values)

    return any_


def _all_factory(context: HelperContext):
    def all_(*values: Any) -> bool:
        return all(values)

    return all_


HELPERS = [
    HelperDescriptor("pluck", _pluck_factory),
    HelperDescriptor("limit", _limit_factory),
    HelperDescriptor("contains", _contains_factory),
    HelperDescriptor("any", _any_factory),
    HelperDescriptor("all", _all_factory),
]
