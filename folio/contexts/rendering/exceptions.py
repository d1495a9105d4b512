"""Typed errors for each phase of the render pipeline."""

from enum import Enum
from types import SimpleNamespace
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Pipeline phase a RendererError is attributed to."""

    COMPILE = "compile"
    FORMAT = "format"
    RENDER = "render"
    DECORATOR = "decorator"
    TEMPLATE_NOT_FOUND = "template_not_found"


class RendererError(Exception):
    """
    Base error raised by the renderer.

    Attributes:
        kind: Pipeline phase this error belongs to
        message: Error description
        context: Optional structured context (e.g., {"path": "pages/home"})
        original_error: The underlying exception, if any
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.context = dict(context) if context else {}
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if self.context:
            details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
            parts.append(f"Context: {details}")

        if original_error is not None and str(original_error) != message:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))

    @property
    def path(self) -> Optional[str]:
        """Template path the error is attributed to, if known."""
        return self.context.get("path")


class CompileError(RendererError):
    """Raised when template source cannot be compiled."""

    kind = ErrorKind.COMPILE


class FormatError(RendererError):
    """Raised when a precompiled template cannot be restored."""

    kind = ErrorKind.FORMAT


class RenderError(RendererError):
    """Raised when executing a template against a context fails."""

    kind = ErrorKind.RENDER


class DecoratorError(RendererError):
    """Raised when a post-render decorator fails."""

    kind = ErrorKind.DECORATOR


class TemplateNotFoundError(RendererError):
    """Raised when rendering a path that was never registered."""

    kind = ErrorKind.TEMPLATE_NOT_FOUND


# Registry of error classes for callers that discriminate by class
RENDER_ERRORS = SimpleNamespace(
    CompileError=CompileError,
    FormatError=FormatError,
    RenderError=RenderError,
    DecoratorError=DecoratorError,
    TemplateNotFoundError=TemplateNotFoundError,
)
