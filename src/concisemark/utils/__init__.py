#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/utils/__init__.py
"""Utility helpers for escaping, metadata and text handling."""
