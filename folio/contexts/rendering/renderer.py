"""
Renderer

Facade over a Jinja2 environment for theme rendering. A Renderer owns:
- the template store (partials keyed by logical path)
- the helper library, built once against a shared HelperContext
- the decorator chain applied to every rendered partial
- the translator and content regions read by helpers

Intended usage is to configure once (add_templates, add_decorator, add_content,
set_translator) and then render many times. Mutators take no locks.

Example:
    renderer = Renderer(site_settings={"cdn_url": "https://cdn.example.com"})
    renderer.add_templates({"pages/home": "<h1>{{ title }}</h1>"})
    html = renderer.render("pages/home", {"title": "Welcome"})
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, Undefined

from folio.contexts.helpers import HELPERS, HelperContext, HelperDescriptor, Translator, register_helpers
from folio.contexts.rendering.config import RendererConfig, load_renderer_config
from folio.contexts.rendering.decorators import Decorator, DecoratorChain
from folio.contexts.rendering.exceptions import (
    RENDER_ERRORS,
    CompileError,
    DecoratorError,
    RenderError,
    TemplateNotFoundError,
)
from folio.contexts.rendering.logger import _log_error, log_precompile_result
from folio.contexts.rendering.precompiled import precompile
from folio.contexts.rendering.template_store import TemplateStore, TemplateStoreLoader, require_source


class Renderer:
    """
    Jinja2-backed renderer with typed errors for every pipeline phase.

    Errors raised:
        CompileError: Template source does not compile
        FormatError: A precompiled template cannot be restored
        RenderError: Template or helper execution failed
        DecoratorError: A decorator raised
        TemplateNotFoundError: Rendering a path that was never registered
    """

    # Error classes for callers that discriminate by class (Renderer.errors.RenderError)
    errors = RENDER_ERRORS

    def __init__(
        self,
        site_settings: Optional[Dict[str, Any]] = None,
        theme_settings: Optional[Dict[str, Any]] = None,
        config: Optional[RendererConfig] = None,
        helpers: Optional[Iterable[HelperDescriptor]] = None,
    ):
        """
        Initialize the renderer and register helpers.

        Args:
            site_settings: Global site settings, passed to helpers
            theme_settings: Theme settings (configuration), passed to helpers
            config: Engine options. Defaults to RENDERER_CONFIG_PATH or built-in defaults
            helpers: Helper declarations. Defaults to the built-in helper library
        """
        if config is None:
            config = load_renderer_config()
        self.config = config

        self.environment = Environment(
            undefined=StrictUndefined if config.strict_undefined else Undefined,
            **config.environment_options(),
        )
        self.store = TemplateStore(self.environment)
        self.environment.loader = TemplateStoreLoader(self.store)

        self._translator: Optional[Translator] = None
        self._decorators = DecoratorChain()
        self._content_regions: Dict[str, Any] = {}

        # Build global context for helpers
        self.helper_context = HelperContext(
            site_settings=site_settings or {},
            theme_settings=theme_settings or {},
            environment=self.environment,
            get_translator=self.get_translator,
            get_content=self.get_content,
        )

        register_helpers(
            self.environment, HELPERS if helpers is None else helpers, self.helper_context
        )

    def set_translator(self, translator: Optional[Translator]) -> None:
        """Set the translator used by helpers and for locale_name."""
        self._translator = translator

    def get_translator(self) -> Optional[Translator]:
        return self._translator

    def add_templates(self, templates: Mapping[str, str]) -> None:
        """
        Add templates to the active set of partials.

        Templates can be raw source or the output of get_pre_processor(). Paths that
        are already registered are skipped; the first registration wins.

        Raises:
            FormatError: If a precompiled template cannot be restored
            CompileError: If raw template source does not compile
        """
        self.store.add_templates(templates)

    def is_template_loaded(self, path: str) -> bool:
        """Detect whether a given template has been loaded."""
        return self.store.is_template_loaded(path)

    def get_pre_processor(self) -> Callable[[Mapping[str, str]], Dict[str, str]]:
        """
        Return a function that precompiles a set of templates.

        The returned function maps {path: source} to {path: artifact text}. Artifacts
        can be passed to add_templates() on any renderer running the same
        interpreter and Jinja2 release.

        Raises (from the returned function):
            CompileError: With context["path"] set to the template that failed, including
                entries that are not template text
        """

        def pre_process(templates: Mapping[str, str]) -> Dict[str, str]:
            processed: Dict[str, str] = {}
            for path, source in templates.items():
                require_source(path, source)
                try:
                    processed[path] = precompile(self.environment, source, name=path)
                except TemplateSyntaxError as e:
                    log_precompile_result(len(processed), failed_path=path)
                    raise CompileError(
                        e.message or str(e), context={"path": path, "line": e.lineno}, original_error=e
                    ) from e

            log_precompile_result(len(processed))
            return processed

        return pre_process

    def add_decorator(self, decorator: Decorator) -> None:
        """Add a decorator to be applied to rendered partials, after existing ones."""
        self._decorators.add(decorator)

    def add_content(self, regions: Dict[str, Any]) -> None:
        """Replace the content regions used by the region helper."""
        self._content_regions = regions

    def get_content(self) -> Dict[str, Any]:
        return self._content_regions

    def render(self, path: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render a registered template with the given context.

        The context is updated in place with template=path and, when a translator is
        set, locale_name. The output is passed through every decorator in order.

        Args:
            path: Logical template path
            context: Template variables

        Returns:
            Rendered and decorated output

        Raises:
            TemplateNotFoundError: If path is not registered
            RenderError: If template execution fails
            DecoratorError: If a decorator raises (remaining decorators are skipped)
        """
        if context is None:
            context = {}

        context["template"] = path
        if self._translator is not None:
            context["locale_name"] = self._translator.get_locale()

        template = self.store.get(path)
        if template is None:
            _log_error(f"Template not found: {path}")
            raise TemplateNotFoundError(f"template not found: {path}", context={"path": path})

        try:
            result = template.render(context)
        except Exception as e:
            _log_error(f"Failed to render '{path}': {e}")
            raise RenderError(str(e), context={"path": path}, original_error=e) from e

        try:
            result = self._decorators.apply(result)
        except Exception as e:
            _log_error(f"Decorator failed for '{path}': {e}")
            raise DecoratorError(str(e), context={"path": path}, original_error=e) from e

        return result

    def render_string(self, source: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Compile and render a template string.

        The string is compiled fresh on every call and never stored. No context
        fields are added and no decorators are applied.

        Raises:
            CompileError: If the source does not compile
            RenderError: If template execution fails
        """
        if context is None:
            context = {}

        try:
            template = self.environment.from_string(source)
        except TemplateSyntaxError as e:
            _log_error(f"Failed to compile template string: {e}")
            raise CompileError(e.message or str(e), context={"line": e.lineno}, original_error=e) from e

        try:
            return template.render(context)
        except Exception as e:
            _log_error(f"Failed to render template string: {e}")
            raise RenderError(str(e), original_error=e) from e
