#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/options/base.py
"""Base classes for parser and renderer options.

This module defines the foundation classes for the option dataclasses used
by the concisemark parser and renderers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from concisemark.constants import DEFAULT_EXTRACT_METADATA, DEFAULT_WARN_UNKNOWN_EXTENSIONS


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    warn_unknown_extensions : bool, default True
        Log a warning when an ``@key{value}`` node has no registered handler,
        or its handler fails, before falling back to the literal text

    """

    warn_unknown_extensions: bool = field(
        default=DEFAULT_WARN_UNKNOWN_EXTENSIONS,
        metadata={
            "help": "Log a warning when an extension key is unknown or its handler fails",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate base renderer options."""
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parameters
    ----------
    extract_metadata : bool
        Whether to read the ``<!--- ... -->`` TOML header into page metadata

    """

    extract_metadata: bool = field(
        default=DEFAULT_EXTRACT_METADATA,
        metadata={"help": "Extract the TOML front-matter header as page metadata", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate base parser options."""
        pass
