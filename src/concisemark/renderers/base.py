#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/renderers/base.py
"""Base classes for page renderers.

Renderers walk a page's :class:`~concisemark.ast.tree.DocumentTree` with the
visitor pattern and never modify it. All per-render state lives in the
renderer instance and is reset at the start of each
:meth:`BaseRenderer.render_to_string` call, so one instance may render many
pages in turn but must not be shared between threads while rendering.

"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Callable, Optional, Union

from concisemark.ast.nodes import Node
from concisemark.constants import RenderTarget
from concisemark.exceptions import InvalidOptionsError, UnknownExtensionKey
from concisemark.extensions.registry import ExtensionRegistry, get_default_registry
from concisemark.options.base import BaseRendererOptions

if TYPE_CHECKING:
    from concisemark.ast.tree import DocumentTree
    from concisemark.page import Page

logger = logging.getLogger(__name__)

NodeHook = Callable[[Node], Optional[str]]


class BaseRenderer(ABC):
    """Abstract base class for all page renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        self.options = options

    @abstractmethod
    def render_to_string(self, page: Page) -> str:
        """Render a page to a string.

        Parameters
        ----------
        page : Page
            Parsed page to render

        Returns
        -------
        str
            Rendered document

        """
        raise NotImplementedError

    def render(self, page: Page, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render a page and write it to ``output``.

        Parameters
        ----------
        page : Page
            Parsed page to render
        output : str, Path, IO[bytes] or IO[str]
            File path or writable stream

        """
        self.write_text_output(self.render_to_string(page), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file path or stream.

        Binary streams receive UTF-8 bytes; text streams receive the string.

        Raises
        ------
        TypeError
            If output is neither a path nor a writable stream

        Examples
        --------
            >>> from io import BytesIO
            >>> buffer = BytesIO()
            >>> BaseRenderer.write_text_output("<p>hi</p>", buffer)
            >>> buffer.getvalue()
            b'<p>hi</p>'

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
        elif isinstance(output, (io.RawIOBase, io.BufferedIOBase)):
            output.write(text.encode("utf-8"))
        elif isinstance(output, io.TextIOBase):
            output.write(text)
        elif hasattr(output, "write"):
            mode = getattr(output, "mode", "")
            if "b" in mode:
                output.write(text.encode("utf-8"))  # type: ignore[arg-type]
            else:
                output.write(text)  # type: ignore[arg-type]
        else:
            raise TypeError(f"Unsupported output type: {type(output).__name__}")


class TreeContentMixin:
    """Mixin for text renderers that accumulate output while walking a tree.

    The implementing class keeps ``_tree`` (the tree being rendered),
    ``_output`` (list of fragments) and ``node_hook``. The hook is consulted
    before every node: when it returns a string, that string replaces the
    node's own rendering, including its subtree.
    """

    _tree: DocumentTree
    _output: list[str]
    node_hook: Optional[NodeHook]

    def dispatch(self, node: Node) -> Any:
        if self.node_hook is not None:
            replacement = self.node_hook(node)
            if replacement is not None:
                self._output.append(replacement)
                return None
        return super().dispatch(node)  # type: ignore[misc]

    def _render_node(self, node: Node) -> str:
        """Render one node to a string without touching the current output."""
        saved_output = self._output
        self._output = []
        node.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result

    def _render_children(self, node: Node) -> str:
        """Render the children of ``node`` to a string."""
        return "".join(self._render_node(child) for child in self._tree.children(node))


class ExtensionContentMixin:
    """Mixin resolving extension nodes through an :class:`ExtensionRegistry`."""

    registry: ExtensionRegistry
    options: Any

    @staticmethod
    def _resolve_registry(registry: Optional[ExtensionRegistry]) -> ExtensionRegistry:
        return registry if registry is not None else get_default_registry()

    def _render_extension(self, node: Node, target: RenderTarget, escape: Callable[[str], str]) -> str:
        """Return the handler output for ``node``, or the escaped literal text.

        Unknown keys and failing handlers fall back to ``@key{value}`` so a
        render call never fails on an extension.
        """
        key = str(node.attrs.get("key", ""))
        value = str(node.attrs.get("value", ""))
        warn = self.options.warn_unknown_extensions
        try:
            return self.registry.get(key).render(value, target)
        except UnknownExtensionKey:
            if warn:
                logger.warning(f"No handler for extension '@{key}'; rendering it as literal text")
        except Exception as e:
            if warn:
                logger.warning(f"Extension handler '@{key}' failed for {target}: {e}; rendering it as literal text")
        return escape(f"@{key}{{{value}}}")


__all__ = ["BaseRenderer", "TreeContentMixin", "ExtensionContentMixin", "NodeHook"]
