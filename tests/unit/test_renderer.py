"""Unit tests for the Renderer facade."""

import pytest

from folio.contexts.helpers import HelperDescriptor
from folio.contexts.rendering import (
    CompileError,
    DecoratorError,
    ErrorKind,
    FormatError,
    Renderer,
    RenderError,
    RendererConfig,
    RendererError,
    TemplateNotFoundError,
)
from folio.contexts.rendering.precompiled import is_precompiled


class StubTranslator:
    def __init__(self, locale="en-US"):
        self.locale = locale

    def get_locale(self):
        return self.locale

    def translate(self, key, params=None):
        return f"{key}:{(params or {}).get('name', '')}"

    def get_language(self, key_filter=None):
        return {"greeting": "Hello"}


@pytest.fixture
def renderer():
    return Renderer(config=RendererConfig())


@pytest.mark.unit
def test_render_registered_template(renderer):
    renderer.add_templates({"pages/home": "<h1>{{ title }}</h1>"})
    assert renderer.render("pages/home", {"title": "Welcome"}) == "<h1>Welcome</h1>"


@pytest.mark.unit
def test_add_templates_first_registration_wins(renderer):
    renderer.add_templates({"a": "x"})
    assert renderer.is_template_loaded("a")

    renderer.add_templates({"a": "x"})
    renderer.add_templates({"a": "y"})

    assert renderer.render("a") == "x"


@pytest.mark.unit
def test_precompiled_and_raw_render_identically():
    """Round trip: a precompiled template renders like its raw source."""
    source = "{% for p in products %}{{ p.name|upper }}{% if not loop.last %}, {% endif %}{% endfor %}"
    context = {"products": [{"name": "mug"}, {"name": "<hat>"}]}

    raw_renderer = Renderer(config=RendererConfig())
    raw_renderer.add_templates({"p": source})

    compiled_renderer = Renderer(config=RendererConfig())
    bundle = compiled_renderer.get_pre_processor()({"p": source})
    compiled_renderer.add_templates(bundle)

    assert raw_renderer.render("p", dict(context)) == compiled_renderer.render("p", dict(context))


@pytest.mark.unit
def test_render_adds_template_and_locale_to_context(renderer):
    """The caller's context is updated in place and visible to the template."""
    renderer.set_translator(StubTranslator("en-US"))
    renderer.add_templates({"pages/home": "{{ locale_name }}|{{ template }}"})
    context = {}

    assert renderer.render("pages/home", context) == "en-US|pages/home"
    assert context == {"template": "pages/home", "locale_name": "en-US"}


@pytest.mark.unit
def test_render_without_translator_sets_only_template(renderer):
    renderer.add_templates({"p": "{{ locale_name is defined }}"})
    context = {}

    assert renderer.render("p", context) == "False"
    assert context == {"template": "p"}
    assert renderer.get_translator() is None


@pytest.mark.unit
def test_missing_template_raises_not_found_without_decorating(renderer):
    calls = []
    renderer.add_decorator(lambda s: calls.append(s) or s)

    with pytest.raises(TemplateNotFoundError, match="template not found: unregistered/path") as excinfo:
        renderer.render("unregistered/path", {})

    assert excinfo.value.kind is ErrorKind.TEMPLATE_NOT_FOUND
    assert excinfo.value.path == "unregistered/path"
    assert calls == []


@pytest.mark.unit
def test_decorators_apply_in_registration_order(renderer):
    renderer.add_templates({"p": "X"})
    renderer.add_decorator(lambda s: s + "A")
    renderer.add_decorator(lambda s: s + "B")

    assert renderer.render("p") == "XAB"


@pytest.mark.unit
def test_decorator_failure_stops_chain(renderer):
    """A failing decorator raises DecoratorError and later decorators never run."""
    later_calls = []

    def failing(content):
        raise ValueError("boom")

    renderer.add_templates({"p": "X"})
    renderer.add_decorator(failing)
    renderer.add_decorator(lambda s: later_calls.append(s) or s)

    with pytest.raises(DecoratorError, match="boom") as excinfo:
        renderer.render("p")

    assert later_calls == []
    assert isinstance(excinfo.value.original_error, ValueError)


@pytest.mark.unit
def test_add_decorator_rejects_non_callable(renderer):
    with pytest.raises(TypeError):
        renderer.add_decorator("not a function")


@pytest.mark.unit
def test_execution_failure_raises_render_error(renderer):
    def fail():
        raise RuntimeError("kaput")

    renderer.add_templates({"p": "{{ fail() }}"})

    with pytest.raises(RenderError, match="kaput") as excinfo:
        renderer.render("p", {"fail": fail})

    assert excinfo.value.path == "p"
    assert isinstance(excinfo.value.original_error, RuntimeError)


@pytest.mark.unit
def test_missing_helper_raises_render_error(renderer):
    renderer.add_templates({"p": "{{ no_such_helper() }}"})

    with pytest.raises(RenderError):
        renderer.render("p")


@pytest.mark.unit
def test_missing_include_raises_render_error(renderer):
    """Only the top-level lookup raises TemplateNotFoundError."""
    renderer.add_templates({"p": "{% include 'components/missing' %}"})

    with pytest.raises(RenderError, match="components/missing"):
        renderer.render("p")


@pytest.mark.unit
def test_strict_undefined_profile():
    lenient = Renderer(config=RendererConfig(strict_undefined=False))
    strict = Renderer(config=RendererConfig(strict_undefined=True))
    lenient.add_templates({"p": "[{{ nope }}]"})
    strict.add_templates({"p": "[{{ nope }}]"})

    assert lenient.render("p") == "[]"
    with pytest.raises(RenderError):
        strict.render("p")


@pytest.mark.unit
def test_render_string_compiles_fresh(renderer):
    assert renderer.render_string("Hi {{ name }}", {"name": "Ann"}) == "Hi Ann"
    assert not renderer.is_template_loaded("Hi {{ name }}")


@pytest.mark.unit
def test_render_string_skips_context_fields_and_decorators(renderer):
    renderer.set_translator(StubTranslator())
    renderer.add_decorator(lambda s: s + "!")

    assert renderer.render_string("{{ template is defined }}/{{ locale_name is defined }}") == "False/False"


@pytest.mark.unit
def test_render_string_compile_error(renderer):
    with pytest.raises(CompileError) as excinfo:
        renderer.render_string("{% if %}")

    assert excinfo.value.kind is ErrorKind.COMPILE


@pytest.mark.unit
def test_render_string_render_error(renderer):
    with pytest.raises(RenderError):
        renderer.render_string("{{ 1 / 0 }}")


@pytest.mark.unit
def test_pre_processor_attributes_failure_to_entry(renderer):
    """Compile failures in a batch name the template that failed."""
    pre_process = renderer.get_pre_processor()

    processed = pre_process({"good": "{{ ok }}"})
    assert list(processed) == ["good"]
    assert is_precompiled(processed["good"])

    with pytest.raises(CompileError) as excinfo:
        pre_process({"good": "{{ ok }}", "bad": "{% if ok %}"})

    assert excinfo.value.path == "bad"


@pytest.mark.unit
def test_pre_processor_rejects_non_text_entry(renderer):
    with pytest.raises(CompileError, match="got NoneType") as excinfo:
        renderer.get_pre_processor()({"good": "{{ ok }}", "bad": None})

    assert excinfo.value.path == "bad"
    assert isinstance(excinfo.value, RendererError)


@pytest.mark.unit
def test_add_templates_rejects_non_text_entry(renderer):
    with pytest.raises(CompileError) as excinfo:
        renderer.add_templates({"bad": {"compiler": [1], "main": {}}})

    assert excinfo.value.path == "bad"
    assert not renderer.is_template_loaded("bad")


@pytest.mark.unit
def test_add_templates_format_error(renderer):
    corrupt = '{"compiler": [], "main": {"function": "AAAA"}}'

    with pytest.raises(FormatError) as excinfo:
        renderer.add_templates({"broken": corrupt})

    assert excinfo.value.path == "broken"


@pytest.mark.unit
def test_content_regions_are_replaced_wholesale(renderer):
    assert renderer.get_content() == {}

    regions = {"header_bottom": "<p>Sale</p>"}
    renderer.add_content(regions)
    assert renderer.get_content() is regions

    renderer.add_content({"footer": "x"})
    assert renderer.get_content() == {"footer": "x"}


@pytest.mark.unit
def test_error_registry_exposes_five_kinds():
    errors = Renderer.errors
    classes = [
        errors.CompileError,
        errors.FormatError,
        errors.RenderError,
        errors.DecoratorError,
        errors.TemplateNotFoundError,
    ]

    assert all(issubclass(cls, RendererError) for cls in classes)
    assert len({cls.kind for cls in classes}) == 5
    assert errors.RenderError is RenderError


@pytest.mark.unit
def test_helper_factory_failure_aborts_construction():
    """Factory exceptions propagate unwrapped."""

    def broken_factory(context):
        raise LookupError("missing setting")

    with pytest.raises(LookupError, match="missing setting"):
        Renderer(config=RendererConfig(), helpers=[HelperDescriptor("broken", broken_factory)])


@pytest.mark.unit
def test_helpers_receive_settings():
    custom = Renderer(
        site_settings={"store_name": "Acme"},
        theme_settings={"color": "red"},
        config=RendererConfig(),
        helpers=[
            HelperDescriptor(
                "describe",
                lambda context: lambda: f"{context.site_settings['store_name']}/{context.theme_settings['color']}",
            )
        ],
    )

    assert custom.render_string("{{ describe() }}") == "Acme/red"
    assert custom.helper_context.environment is custom.environment
