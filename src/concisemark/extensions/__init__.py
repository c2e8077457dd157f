#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/extensions/__init__.py
"""Extension handlers for ``@key{value}`` nodes."""

from concisemark.extensions.registry import (
    ExtensionHandler,
    ExtensionRegistry,
    HandlerFunc,
    get_default_registry,
    register_extension,
    unregister_extension,
)

__all__ = [
    "HandlerFunc",
    "ExtensionHandler",
    "ExtensionRegistry",
    "get_default_registry",
    "register_extension",
    "unregister_extension",
]
