"""Command line interface."""

from fashionhub_e2e.cli.main import FashionHubCLI, main
from fashionhub_e2e.cli.runner import TestRunner

__all__ = ["FashionHubCLI", "TestRunner", "main"]
