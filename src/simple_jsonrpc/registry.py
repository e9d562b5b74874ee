"""Handler registry - maps method names to the callables that serve them."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator, Mapping, Sequence
from functools import cached_property
from typing import Any

Handler = Callable[..., Any]


class HandlerNotFoundError(Exception):
    """Raised when no handler is registered under a method name."""

    pass


class HandlerArgumentError(Exception):
    """Raised when the params do not fit the handler's signature."""

    pass


class HandlerRegistry:
    """Routes method names to registered handlers.

    Handlers take positional arguments only and return a JSON-serializable
    value.
    """

    def __init__(self, handlers: Mapping[str, Handler] | None = None) -> None:
        """Initialize the registry.

        Args:
            handlers: Optional initial name -> handler mapping.
        """
        self._handlers: dict[str, Handler] = {}
        for name, func in (handlers or {}).items():
            self.register(name, func)

    @classmethod
    def from_object(cls, obj: Any) -> HandlerRegistry:
        """Build a registry exposing the public methods of ``obj``."""
        registry = cls()
        registry.register_object(obj)
        return registry

    def register(self, name: str, func: Handler) -> None:
        """Register a handler under ``name``.

        Raises:
            ValueError: If the name is empty or ``func`` is not callable.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Handler name must be a non-empty string")
        if not callable(func):
            raise ValueError(f"Handler for '{name}' is not callable")
        self._handlers[name] = func

    def register_object(self, obj: Any) -> None:
        """Register every public callable attribute of ``obj`` under its own name.

        Properties are skipped without being evaluated.
        """
        for name in dir(obj):
            if name.startswith("_"):
                continue
            if isinstance(inspect.getattr_static(obj, name, None), (property, cached_property)):
                continue
            member = getattr(obj, name, None)
            if callable(member) and not inspect.isclass(member):
                self.register(name, member)

    def unregister(self, name: str) -> None:
        """Remove a handler; unknown names are ignored."""
        self._handlers.pop(name, None)

    def get(self, name: str) -> Handler | None:
        return self._handlers.get(name)

    def names(self) -> list[str]:
        """List registered method names in registration order."""
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def invoke(self, name: str, args: Sequence[Any]) -> Any:
        """Call a handler by name.

        Args:
            name: Method name.
            args: Positional arguments.

        Returns:
            Whatever the handler returns.

        Raises:
            HandlerNotFoundError: If no handler is registered under ``name``.
            HandlerArgumentError: If ``args`` do not bind to the handler.
            Exception: Anything the handler itself raises.
        """
        func = self._handlers.get(name)
        if func is None:
            raise HandlerNotFoundError(f"Method not found: {name}")

        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            # Some builtins have no introspectable signature
            signature = None
        if signature is not None:
            try:
                signature.bind(*args)
            except TypeError as e:
                raise HandlerArgumentError(f"Incorrect parameters for '{name}': {e}") from e

        return func(*args)
