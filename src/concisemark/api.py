"""The major exported API functions for parsing and rendering pages."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/concisemark/api.py
import logging
from pathlib import Path
from typing import IO, Any, Optional, Union

from concisemark.constants import OutputFormat
from concisemark.exceptions import ValidationError
from concisemark.extensions.registry import ExtensionRegistry
from concisemark.options.ast_json import AstJsonRendererOptions
from concisemark.options.base import BaseRendererOptions
from concisemark.options.concisemark import ConciseMarkOptions
from concisemark.options.html import HtmlRendererOptions
from concisemark.options.latex import LatexRendererOptions
from concisemark.page import Page
from concisemark.parsers.base import ParserInput
from concisemark.parsers.concisemark import ConciseMarkParser
from concisemark.renderers.ast_json import AstJsonRenderer
from concisemark.renderers.base import BaseRenderer, NodeHook
from concisemark.renderers.html import HtmlRenderer
from concisemark.renderers.latex import LatexRenderer
from concisemark.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

_RENDERER_OPTIONS: dict[str, type[BaseRendererOptions]] = {
    "html": HtmlRendererOptions,
    "latex": LatexRendererOptions,
    "json": AstJsonRendererOptions,
}


def _apply_option_overrides(options: Any, options_class: type, **kwargs: Any) -> Any:
    """Return ``options`` (or a default instance) with ``kwargs`` applied.

    Raises
    ------
    ValidationError
        If a keyword does not name a field of ``options_class``

    """
    options = options or options_class()
    if not kwargs:
        return options
    known = set(options_class.__dataclass_fields__)
    unknown = sorted(set(kwargs) - known)
    if unknown:
        raise ValidationError(
            f"Unknown option(s) for {options_class.__name__}: {', '.join(unknown)}",
            parameter_name=unknown[0],
            parameter_value=kwargs[unknown[0]],
        )
    return options.create_updated(**kwargs)


def parse(
    source: ParserInput,
    options: Optional[ConciseMarkOptions] = None,
    registry: Optional[ExtensionRegistry] = None,
    **kwargs: Any,
) -> Page:
    """Parse concisemark text into a :class:`Page`.

    Parameters
    ----------
    source : str, bytes, Path or IO
        Document text. A ``str`` is always treated as the text itself; use
        :func:`parse_file` or pass a ``Path`` to read a file.
    options : ConciseMarkOptions, optional
        Parser options
    registry : ExtensionRegistry, optional
        Registry consulted for ``@key{value}`` keys in strict mode
    kwargs : Any
        Individual parser options that override settings in ``options``

    Returns
    -------
    Page
        Metadata, document tree and source text

    Raises
    ------
    MetaParseError
        If the front-matter header is malformed
    ValidationError
        If the input cannot be read or an option keyword is unknown

    Examples
    --------
        >>> page = parse("<!---\\ntitle = \\"Notes\\"\\n-->\\n# Hello")
        >>> page.title
        'Notes'
        >>> page.tree.children(page.ast)[0].tag.value
        'heading1'

    """
    options = _apply_option_overrides(options, ConciseMarkOptions, **kwargs)
    with debug_timer(logger, "Parsing"):
        return ConciseMarkParser(options, registry=registry).parse(source)


def parse_file(
    path: Union[str, Path],
    options: Optional[ConciseMarkOptions] = None,
    registry: Optional[ExtensionRegistry] = None,
    encoding: str = "utf-8",
) -> Page:
    """Read ``path`` and parse its contents.

    Raises
    ------
    ValidationError
        If the file cannot be read or decoded

    """
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(
            f"Cannot read {path}: {e}", parameter_name="path", parameter_value=path, original_error=e
        ) from e
    logger.debug(f"Read {len(text)} characters from {path}")
    if text.startswith("\ufeff"):
        text = text[1:]
    return parse(text, options=options, registry=registry)


def get_renderer(
    format: OutputFormat = "html",
    options: Optional[BaseRendererOptions] = None,
    registry: Optional[ExtensionRegistry] = None,
    node_hook: Optional[NodeHook] = None,
    **kwargs: Any,
) -> BaseRenderer:
    """Create the renderer for ``format``.

    Parameters
    ----------
    format : {"html", "latex", "json"}
        Output format
    options : BaseRendererOptions, optional
        Options matching the format
    registry : ExtensionRegistry, optional
        Extension handlers; ignored for ``json``
    node_hook : callable, optional
        Per-node override; ignored for ``json``
    kwargs : Any
        Individual renderer options that override settings in ``options``

    Raises
    ------
    ValidationError
        If ``format`` is unknown or an option keyword is unknown
    InvalidOptionsError
        If ``options`` does not match ``format``

    """
    if format not in _RENDERER_OPTIONS:
        raise ValidationError(
            f"Unknown output format '{format}'; expected one of: {', '.join(_RENDERER_OPTIONS)}",
            parameter_name="format",
            parameter_value=format,
        )
    # A mismatched options type is left for the renderer to reject
    options_class = type(options) if options is not None else _RENDERER_OPTIONS[format]
    options = _apply_option_overrides(options, options_class, **kwargs)

    if format == "html":
        return HtmlRenderer(options, registry=registry, node_hook=node_hook)  # type: ignore[arg-type]
    if format == "latex":
        return LatexRenderer(options, registry=registry, node_hook=node_hook)  # type: ignore[arg-type]
    return AstJsonRenderer(options)  # type: ignore[arg-type]


def render(
    page: Page,
    format: OutputFormat = "html",
    options: Optional[BaseRendererOptions] = None,
    registry: Optional[ExtensionRegistry] = None,
    node_hook: Optional[NodeHook] = None,
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    **kwargs: Any,
) -> str:
    """Render a page to HTML, LaTeX or JSON.

    Parameters
    ----------
    page : Page
        Parsed page
    format : {"html", "latex", "json"}, default "html"
        Output format
    options : BaseRendererOptions, optional
        Options matching the format
    registry : ExtensionRegistry, optional
        Extension handlers; the default registry when None
    node_hook : callable, optional
        ``node -> str | None``; a returned string replaces the node's output
    output : str, Path or IO, optional
        Also write the result to this path or stream
    kwargs : Any
        Individual renderer options that override settings in ``options``

    Returns
    -------
    str
        The rendered text

    Examples
    --------
        >>> render(parse("Press @kbd{cmd+c}"))
        '<div>\\n<p>Press <kbd>⌘</kbd>+<kbd>c</kbd></p>\\n</div>\\n'

    """
    renderer = get_renderer(format, options, registry=registry, node_hook=node_hook, **kwargs)
    with debug_timer(logger, f"Rendering ({format})"):
        result = renderer.render_to_string(page)
    if output is not None:
        renderer.write_text_output(result, output)
    return result


def to_html(source: ParserInput, options: Optional[HtmlRendererOptions] = None, **kwargs: Any) -> str:
    """Parse ``source`` and render it to HTML in one step."""
    return render(parse(source), "html", options, **kwargs)


def to_latex(source: ParserInput, options: Optional[LatexRendererOptions] = None, **kwargs: Any) -> str:
    """Parse ``source`` and render it to a LaTeX body fragment in one step."""
    return render(parse(source), "latex", options, **kwargs)


def to_json(source: ParserInput, options: Optional[AstJsonRendererOptions] = None, **kwargs: Any) -> str:
    """Parse ``source`` and serialize its page to JSON in one step."""
    return render(parse(source), "json", options, **kwargs)


__all__ = ["parse", "parse_file", "get_renderer", "render", "to_html", "to_latex", "to_json"]
