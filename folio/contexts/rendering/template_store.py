"""
Template Store

Holds the registered partials of a renderer, keyed by logical path
(e.g., "components/products/card"). First registration wins: a path that is
already present is never replaced.
"""

from typing import Any, Dict, Iterator, Mapping, Optional

from jinja2 import BaseLoader, Environment, Template, TemplateNotFound, TemplateSyntaxError

from folio.contexts.rendering.exceptions import CompileError, FormatError
from folio.contexts.rendering.logger import _log_error, log_template_registered, log_template_skipped
from folio.contexts.rendering.precompiled import try_restoring_precompiled


def require_source(path: str, payload: Any) -> str:
    """Reject payloads that are not template text, naming the offending path."""
    if not isinstance(payload, str):
        _log_error(f"Template '{path}' is a {type(payload).__name__}, not source text")
        raise CompileError(
            f"template source must be a string, got {type(payload).__name__}",
            context={"path": path},
        )
    return payload


class TemplateStore:
    """
    Registry of compiled partials for one Jinja2 environment.

    Payloads may be raw template source or precompiled artifacts (see
    folio.contexts.rendering.precompiled). Both end up as jinja2.Template objects.
    """

    def __init__(self, environment: Environment):
        self.environment = environment
        self._templates: Dict[str, Template] = {}

    def add_templates(self, templates: Mapping[str, str]) -> None:
        """
        Register a set of templates.

        Paths that are already registered are skipped silently. Each entry is
        handled independently; entries before a failing one stay registered.

        Args:
            templates: Mapping of logical path to raw source or artifact text

        Raises:
            FormatError: If a precompiled artifact cannot be restored
            CompileError: If raw template source does not compile
        """
        for path, payload in templates.items():
            # Don't do this work twice, first one wins
            if path in self._templates:
                log_template_skipped(path)
                continue

            try:
                template = try_restoring_precompiled(self.environment, payload)
            except Exception as e:
                _log_error(f"Failed to restore precompiled template '{path}': {e}")
                raise FormatError(str(e), context={"path": path}, original_error=e) from e

            precompiled = isinstance(template, Template)
            if not precompiled:
                template = self._compile(path, template)

            self._templates[path] = template
            log_template_registered(path, precompiled)

    def _compile(self, path: str, source: str) -> Template:
        require_source(path, source)
        try:
            code = self.environment.compile(source, name=path, filename=path)
        except TemplateSyntaxError as e:
            _log_error(f"Failed to compile template '{path}': {e}")
            raise CompileError(
                e.message or str(e), context={"path": path, "line": e.lineno}, original_error=e
            ) from e

        return self.environment.template_class.from_code(
            self.environment, code, self.environment.make_globals(None)
        )

    def is_template_loaded(self, path: str) -> bool:
        """Check whether a path has been registered."""
        return path in self._templates

    def get(self, path: str) -> Optional[Template]:
        """Return the template registered under path, or None."""
        return self._templates.get(path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


class TemplateStoreLoader(BaseLoader):
    """
    Jinja2 loader backed by a TemplateStore.

    Lets templates pull in other registered partials with
    {% include "components/header" %} or {% extends "layout/base" %}.
    """

    def __init__(self, store: TemplateStore):
        self.store = store

    def load(self, environment, name, globals=None):
        template = self.store.get(name)
        if template is None:
            raise TemplateNotFound(name)
        return template
