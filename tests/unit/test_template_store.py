"""Unit tests for TemplateStore."""

import pytest
from jinja2 import Environment

from folio.contexts.rendering.exceptions import CompileError, ErrorKind, FormatError
from folio.contexts.rendering.precompiled import precompile
from folio.contexts.rendering.template_store import TemplateStore, TemplateStoreLoader


@pytest.fixture
def store():
    env = Environment(autoescape=True)
    store = TemplateStore(env)
    env.loader = TemplateStoreLoader(store)
    return store


@pytest.mark.unit
def test_store_starts_empty(store):
    assert len(store) == 0
    assert not store.is_template_loaded("pages/home")
    assert store.get("pages/home") is None


@pytest.mark.unit
def test_first_registration_wins(store):
    """A later add_templates call never replaces an existing path."""
    store.add_templates({"a": "x"})
    assert store.is_template_loaded("a")
    first = store.get("a")

    store.add_templates({"a": "x"})
    store.add_templates({"a": "y"})

    assert store.get("a") is first
    assert store.get("a").render() == "x"


@pytest.mark.unit
def test_raw_and_precompiled_templates_register(store):
    store.add_templates(
        {
            "raw": "Hi {{ name }}",
            "compiled": precompile(store.environment, "Bye {{ name }}", name="compiled"),
        }
    )

    assert store.get("raw").render(name="Ann") == "Hi Ann"
    assert store.get("compiled").render(name="Ann") == "Bye Ann"
    assert list(store) == ["raw", "compiled"]


@pytest.mark.unit
def test_corrupt_artifact_raises_format_error_with_path(store):
    """Restoration failures identify the failing payload."""
    corrupt = '{"compiler": [1, "x", "y"], "main": {"function": "AAAA"}}'

    with pytest.raises(FormatError) as excinfo:
        store.add_templates({"good": "ok", "broken": corrupt})

    assert excinfo.value.kind is ErrorKind.FORMAT
    assert excinfo.value.path == "broken"
    assert isinstance(excinfo.value.original_error, ValueError)
    # Entries before the failing one stay registered
    assert store.is_template_loaded("good")
    assert not store.is_template_loaded("broken")


@pytest.mark.unit
def test_raw_syntax_error_raises_compile_error_with_path(store):
    with pytest.raises(CompileError) as excinfo:
        store.add_templates({"bad": "{% if ok %}unclosed"})

    assert excinfo.value.path == "bad"
    assert not store.is_template_loaded("bad")


@pytest.mark.unit
def test_templates_include_registered_partials(store):
    """The loader resolves includes against the store."""
    store.add_templates(
        {
            "components/header": "<h1>{{ title }}</h1>",
            "pages/home": "{% include 'components/header' %}body",
        }
    )

    assert store.get("pages/home").render(title="T") == "<h1>T</h1>body"


@pytest.mark.unit
@pytest.mark.parametrize("payload", [None, {"compiler": [1], "main": {}}, 42])
def test_non_text_payload_raises_compile_error_with_path(store, payload):
    with pytest.raises(CompileError, match="template source must be a string") as excinfo:
        store.add_templates({"good": "ok", "bad": payload})

    assert excinfo.value.kind is ErrorKind.COMPILE
    assert excinfo.value.path == "bad"
    assert store.is_template_loaded("good")
    assert not store.is_template_loaded("bad")
