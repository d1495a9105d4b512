"""Unit tests for helper registration."""

import pytest
from jinja2 import Environment

from folio.contexts.helpers import HELPERS, HelperContext, HelperDescriptor, register_helpers


@pytest.fixture
def context():
    env = Environment()
    return HelperContext(
        site_settings={},
        theme_settings={},
        environment=env,
        get_translator=lambda: None,
        get_content=lambda: {},
    )


@pytest.mark.unit
def test_factories_run_once_in_declaration_order(context):
    calls = []

    def factory_for(name):
        def factory(ctx):
            calls.append(name)
            return lambda: name

        return factory

    descriptors = [HelperDescriptor(name, factory_for(name)) for name in ["first", "second", "third"]]
    registered = register_helpers(context.environment, descriptors, context)

    assert calls == ["first", "second", "third"]
    assert list(registered) == ["first", "second", "third"]
    assert context.environment.globals["second"]() == "second"


@pytest.mark.unit
def test_later_helper_with_same_name_wins(context):
    descriptors = [
        HelperDescriptor("greet", lambda ctx: lambda: "hello"),
        HelperDescriptor("greet", lambda ctx: lambda: "howdy"),
    ]

    register_helpers(context.environment, descriptors, context)

    assert context.environment.globals["greet"]() == "howdy"


@pytest.mark.unit
def test_factories_share_one_context(context):
    """Helpers communicate only through the shared storage."""
    descriptors = [
        HelperDescriptor("remember", lambda ctx: lambda value: ctx.storage.update(last=value)),
        HelperDescriptor("recall", lambda ctx: lambda: ctx.storage.get("last")),
    ]

    register_helpers(context.environment, descriptors, context)
    context.environment.globals["remember"]("blue")

    assert context.environment.globals["recall"]() == "blue"
    assert context.storage == {"last": "blue"}


@pytest.mark.unit
def test_factory_exception_propagates(context):
    def broken(ctx):
        raise KeyError("cdn_url")

    with pytest.raises(KeyError):
        register_helpers(context.environment, [HelperDescriptor("broken", broken)], context)


@pytest.mark.unit
@pytest.mark.parametrize("name", ["", None])
def test_descriptor_requires_name(name):
    with pytest.raises(ValueError):
        HelperDescriptor(name, lambda ctx: lambda: None)


@pytest.mark.unit
def test_descriptor_requires_callable_factory():
    with pytest.raises(TypeError):
        HelperDescriptor("money", "not callable")


@pytest.mark.unit
def test_builtin_helper_names_are_unique():
    names = [descriptor.name for descriptor in HELPERS]
    assert len(names) == len(set(names))
    assert {"region", "inject", "jsContext", "lang", "money", "cdn"} <= set(names)
