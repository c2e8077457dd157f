"""Pytest configuration and shared fixtures for the concisemark test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from concisemark.extensions.registry import ExtensionRegistry

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests generated with hypothesis")


@pytest.fixture
def registry() -> ExtensionRegistry:
    """Provide a fresh registry with the built-in handlers.

    Tests that register handlers use this instead of the process-wide default
    registry so they cannot leak into each other.
    """
    return ExtensionRegistry.with_builtins()


@pytest.fixture
def sample_document() -> str:
    """Provide a document that exercises every block and inline construct."""
    return (
        "<!---\n"
        'title = "Field notes"\n'
        'subtitle = "Week 12"\n'
        'date = "2024-03-01 09:30:00"\n'
        'authors = ["Ada", "Grace"]\n'
        'tags = ["notes"]\n'
        "-->\n"
        "# Field notes\n"
        "\n"
        "Energy is $E = mc^2$ and *mostly* **conserved**.\n"
        "\n"
        "$$a^2 + b^2 = c^2$$\n"
        "\n"
        "> Quoted `code` here\n"
        "\n"
        "- first with [a link](https://example.com)\n"
        "    - nested ![chart](chart.png)\n"
        "- press @kbd{cmd+s} to save @emoji{smile}\n"
        "\n"
        "Then run:\n"
        "\n"
        "    def main():\n"
        "        return 0\n"
        "\n"
        "## Summary & next steps\n"
    )
