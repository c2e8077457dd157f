#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/extensions/registry.py
"""Registry of ``@key{value}`` extension handlers.

An extension node carries a key and a raw value. At render time the renderer
looks the key up in an :class:`ExtensionRegistry` and asks the handler for the
fragment of its target format. Handlers are pure functions of the value; they
never see the tree.

Third-party packages can ship handlers through the ``concisemark.extensions``
entry point group. Each entry point is named after its key and loads an
:class:`ExtensionHandler` or a single callable used for both formats::

    [project.entry-points."concisemark.extensions"]
    abbr = "my_package.handlers:abbr_handler"

Thread safety
-------------
Lookups are plain dictionary reads. Registering or unregistering while other
threads render is not supported; give each worker its own :meth:`copy`
instead.

The default registry is created once, under a lock, by the first call to
:func:`get_default_registry`; that call also runs entry point discovery.
Call it (or :func:`register_extension`) before handing pages to worker
threads so every handler is loaded before parsing and rendering begin.
"""

from __future__ import annotations

import importlib.metadata
import logging
import re
import threading
from dataclasses import dataclass
from typing import Callable, Iterator, Mapping, Optional, Union

from concisemark.constants import DEFAULT_EXTENSION_ENTRY_POINT_GROUP, EXTENSION_KEY_PATTERN, RenderTarget
from concisemark.exceptions import UnknownExtensionKey, ValidationError

logger = logging.getLogger(__name__)

HandlerFunc = Callable[[str], str]

_KEY_RE = re.compile(EXTENSION_KEY_PATTERN)


@dataclass(frozen=True)
class ExtensionHandler:
    """Pair of format-specific render functions for one extension key.

    Parameters
    ----------
    html : callable
        ``value -> str`` returning an HTML fragment
    latex : callable
        ``value -> str`` returning a LaTeX fragment
    description : str, default ""
        Human-readable summary

    """

    html: HandlerFunc
    latex: HandlerFunc
    description: str = ""

    def render(self, value: str, target: RenderTarget) -> str:
        """Return the fragment for ``target`` ("html" or "latex")."""
        if target == "html":
            return self.html(value)
        if target == "latex":
            return self.latex(value)
        raise ValueError(f"Unknown render target: {target!r}")


class ExtensionRegistry:
    """Mapping from extension key to :class:`ExtensionHandler`.

    Parameters
    ----------
    handlers : Mapping[str, ExtensionHandler], optional
        Initial handlers

    Examples
    --------
        >>> registry = ExtensionRegistry()
        >>> registry.register("shout", lambda value: value.upper())
        >>> registry.get("shout").render("hi", "html")
        'HI'

    """

    def __init__(self, handlers: Optional[Mapping[str, ExtensionHandler]] = None):
        self._handlers: dict[str, ExtensionHandler] = {}
        for key, handler in (handlers or {}).items():
            self.register(key, handler)

    @classmethod
    def with_builtins(cls) -> ExtensionRegistry:
        """Create a registry holding the ``emoji``, ``kbd``, ``math`` and ``char`` handlers."""
        from concisemark.extensions.builtin import BUILTIN_HANDLERS

        return cls(BUILTIN_HANDLERS)

    def register(self, key: str, handler: Union[ExtensionHandler, HandlerFunc]) -> None:
        """Add or replace the handler for ``key``.

        Parameters
        ----------
        key : str
            Extension key; must match ``[A-Za-z_][A-Za-z0-9_-]*``
        handler : ExtensionHandler or callable
            Handler, or one ``value -> str`` function used for both formats

        Raises
        ------
        ValidationError
            If the key is malformed or the handler is not callable

        """
        if not isinstance(key, str) or not _KEY_RE.fullmatch(key):
            raise ValidationError(f"Invalid extension key: {key!r}", parameter_name="key", parameter_value=key)
        if not isinstance(handler, ExtensionHandler):
            if not callable(handler):
                raise ValidationError(
                    f"Extension handler for '{key}' must be an ExtensionHandler or callable",
                    parameter_name="handler",
                    parameter_value=handler,
                )
            handler = ExtensionHandler(html=handler, latex=handler)
        if key in self._handlers:
            logger.debug(f"Replacing extension handler: {key}")
        else:
            logger.debug(f"Registered extension handler: {key}")
        self._handlers[key] = handler

    def unregister(self, key: str) -> bool:
        """Remove the handler for ``key``.

        Returns
        -------
        bool
            True if a handler was removed, False if the key was not registered

        """
        if key in self._handlers:
            del self._handlers[key]
            logger.debug(f"Unregistered extension handler: {key}")
            return True
        return False

    def get(self, key: str) -> ExtensionHandler:
        """Return the handler for ``key``.

        Raises
        ------
        UnknownExtensionKey
            If no handler is registered for ``key``

        """
        try:
            return self._handlers[key]
        except KeyError:
            raise UnknownExtensionKey(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def keys(self) -> list[str]:
        """Return the registered keys, sorted."""
        return sorted(self._handlers)

    def copy(self) -> ExtensionRegistry:
        """Return an independent registry with the same handlers."""
        return ExtensionRegistry(self._handlers)

    def load_entry_points(self, group: str = DEFAULT_EXTENSION_ENTRY_POINT_GROUP) -> int:
        """Register handlers advertised by installed packages.

        Parameters
        ----------
        group : str, default "concisemark.extensions"
            Entry point group to scan

        Returns
        -------
        int
            Number of handlers registered

        """
        loaded = 0
        for entry_point in importlib.metadata.entry_points(group=group):
            dist_name = entry_point.dist.name if entry_point.dist else "unknown"
            try:
                handler = entry_point.load()
                self.register(entry_point.name, handler)
            except Exception as e:
                logger.warning(f"Failed to load extension '{entry_point.name}' from '{dist_name}': {e}")
                continue
            logger.info(f"Registered plugin extension: {entry_point.name} from package '{dist_name}'")
            loaded += 1
        return loaded


_default_registry: Optional[ExtensionRegistry] = None
_default_registry_lock = threading.RLock()


def get_default_registry() -> ExtensionRegistry:
    """Return the process-wide registry, creating it on first use.

    The default registry starts with the built-in handlers plus any handlers
    published through the ``concisemark.extensions`` entry point group.
    """
    global _default_registry
    with _default_registry_lock:
        if _default_registry is None:
            registry = ExtensionRegistry.with_builtins()
            registry.load_entry_points()
            _default_registry = registry
        return _default_registry


def register_extension(key: str, handler: Union[ExtensionHandler, HandlerFunc]) -> None:
    """Register ``handler`` for ``key`` in the default registry."""
    get_default_registry().register(key, handler)


def unregister_extension(key: str) -> bool:
    """Remove ``key`` from the default registry."""
    return get_default_registry().unregister(key)


__all__ = [
    "HandlerFunc",
    "ExtensionHandler",
    "ExtensionRegistry",
    "get_default_registry",
    "register_extension",
    "unregister_extension",
]
