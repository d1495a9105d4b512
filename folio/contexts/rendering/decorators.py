"""
Decorator Chain

Post-render string transforms applied, in registration order, to the output of
a rendered partial. The chain is append-only.
"""

from typing import Callable, List

Decorator = Callable[[str], str]


class DecoratorChain:
    """Ordered, append-only list of str -> str decorators."""

    def __init__(self):
        self._decorators: List[Decorator] = []

    def add(self, decorator: Decorator) -> None:
        """Append a decorator to the end of the chain."""
        if not callable(decorator):
            raise TypeError(f"Decorator must be callable, got {type(decorator).__name__}")
        self._decorators.append(decorator)

    def apply(self, content: str) -> str:
        """
        Thread content through every decorator.

        Each decorator receives the previous decorator's output. The first
        exception stops the chain and propagates to the caller.
        """
        for decorator in self._decorators:
            content = decorator(content)
        return content
