#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the concisemark library.

This module defines the exception classes raised while parsing and rendering
concisemark documents. Malformed markdown is never an error: unmatched inline
delimiters and bad list indentation degrade to literal text or to the nearest
valid nesting level. Only a broken front-matter header and an internal tree
inconsistency abort a parse.

Exception Hierarchy
-------------------
- ConciseMarkError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - ParsingError (input document parsing failures)
    - MetaParseError (malformed TOML front matter)

  - InvariantViolation (internal tree consistency check failed)

  - UnknownExtensionKey (extension key not in the registry; handled inside
    renderers, never propagated past a render call)

"""

from typing import Any


class ConciseMarkError(Exception):
    """Base exception class for all concisemark-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(ConciseMarkError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(ConciseMarkError):
    """Exception raised when document parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class MetaParseError(ParsingError):
    """Exception raised when the front-matter header cannot be parsed.

    The header is present (the document starts with ``<!---``) but it is not
    terminated, its body is not valid TOML, or a known field has the wrong
    type. The parse aborts before block segmentation and no Page is produced.

    Parameters
    ----------
    message : str
        Description of the problem
    meta_text : str, optional
        The raw header body that failed to parse
    original_error : Exception, optional
        The TOML decoder error or value error that caused the failure

    """

    def __init__(self, message: str, meta_text: str | None = None, original_error: Exception | None = None):
        """Initialize the front-matter error."""
        super().__init__(message, parsing_stage="meta", original_error=original_error)
        self.meta_text = meta_text


class InvariantViolation(ConciseMarkError):
    """Exception raised when the built tree fails its consistency check.

    This signals a bug in the parser, not a problem with the input. It is
    raised instead of returning a Page with a corrupt tree.

    Parameters
    ----------
    message : str
        Description of the violated invariant
    node_index : int, optional
        Arena index of the offending node

    """

    def __init__(self, message: str, node_index: int | None = None):
        """Initialize the invariant violation."""
        super().__init__(message)
        self.node_index = node_index


class UnknownExtensionKey(ConciseMarkError, KeyError):
    """Exception raised by a registry lookup for an unregistered key.

    Renderers catch it and fall back to the literal ``@key{value}`` text, so
    it never escapes a render call.

    Parameters
    ----------
    key : str
        The extension key that was looked up

    """

    def __init__(self, key: str):
        """Initialize the unknown key error."""
        super().__init__(f"No extension handler registered for key '{key}'")
        self.key = key

    def __str__(self) -> str:
        """Return the message rather than the KeyError repr of the args."""
        return self.message


__all__ = [
    "ConciseMarkError",
    "ValidationError",
    "InvalidOptionsError",
    "ParsingError",
    "MetaParseError",
    "InvariantViolation",
    "UnknownExtensionKey",
]
