#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/parsers/base.py
"""Base class for parsers.

The BaseParser fixes the interface shared by concisemark parsers: validate the
options type on construction, load text from the supported input kinds, and
return an immutable :class:`~concisemark.page.Page` from :meth:`BaseParser.parse`.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, TYPE_CHECKING, Union

from concisemark.exceptions import InvalidOptionsError, ValidationError
from concisemark.options.base import BaseParserOptions

if TYPE_CHECKING:
    from concisemark.page import Page

logger = logging.getLogger(__name__)

ParserInput = Union[str, bytes, Path, IO[str], IO[bytes]]


class BaseParser(ABC):
    """Abstract base class for parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Page:
        """Parse the input into a page.

        Parameters
        ----------
        input_data : str, bytes, Path or file-like
            Source text. A ``str`` is always treated as the text itself;
            pass a :class:`~pathlib.Path` to read a file.

        Returns
        -------
        Page
            Metadata plus the immutable document tree

        """
        raise NotImplementedError

    @staticmethod
    def _load_text_content(input_data: ParserInput, encoding: str = "utf-8") -> str:
        """Load source text from the supported input kinds.

        Raises
        ------
        ValidationError
            If bytes cannot be decoded or the input type is unsupported

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, Path):
            data: Union[str, bytes] = input_data.read_bytes()
        elif isinstance(input_data, bytes):
            data = input_data
        elif hasattr(input_data, "read"):
            data = input_data.read()
        else:
            raise ValidationError(
                f"Unsupported input type: {type(input_data).__name__}",
                parameter_name="input_data",
                parameter_value=type(input_data),
            )

        if isinstance(data, str):
            return data
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError as e:
            raise ValidationError(
                f"Input is not valid {encoding} text", parameter_name="input_data", original_error=e
            ) from e
        # A UTF-8 byte order mark would otherwise hide the front-matter header
        return text[1:] if text.startswith("\ufeff") else text


__all__ = ["BaseParser", "ParserInput"]
