"""
Helper Registry

Every helper is declared as a HelperDescriptor: a name plus a factory that receives
the renderer's HelperContext and returns the callable exposed to templates.

    def _money_factory(context: HelperContext):
        def money(value):
            ...
        return money

    HELPERS = [HelperDescriptor("money", _money_factory)]
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

from jinja2 import Environment

from folio.contexts.helpers.context import HelperContext
from folio.contexts.helpers.logger import _log_debug, _log_warning


@dataclass(frozen=True)
class HelperDescriptor:
    """
    Declaration of a template helper.

    Attributes:
        name: Name the helper is exposed under in templates
        factory: Builds the helper callable from the shared HelperContext
    """

    name: str
    factory: Callable[[HelperContext], Callable]

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Helper name must be a non-empty string")
        if not callable(self.factory):
            raise TypeError(f"Helper '{self.name}' factory must be callable")


def register_helpers(
    environment: Environment,
    descriptors: Iterable[HelperDescriptor],
    context: HelperContext,
) -> Dict[str, Callable]:
    """
    Build every helper and register it as a global of the environment.

    Factories run exactly once each, in declaration order. A later descriptor with
    the same name replaces the earlier one. Factory exceptions propagate unchanged.

    Args:
        environment: Jinja2 environment to register helpers with
        descriptors: Helper declarations, in order
        context: Shared context passed to every factory

    Returns:
        Mapping of helper name to the registered callable
    """
    registered: Dict[str, Callable] = {}

    for descriptor in descriptors:
        helper = descriptor.factory(context)
        if descriptor.name in registered:
            _log_warning(f"Helper '{descriptor.name}' registered twice, later one wins")
        environment.globals[descriptor.name] = helper
        registered[descriptor.name] = helper

    _log_debug(f"Registered {len(registered)} helpers")
    return registered
