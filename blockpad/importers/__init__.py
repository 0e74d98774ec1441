"""Page importers for various source formats."""

from .base import BaseImporter, ImportedPage
from .seed import SeedImporter
from .markdown import MarkdownImporter, parse_markdown

__all__ = ["BaseImporter", "ImportedPage", "SeedImporter", "MarkdownImporter", "parse_markdown"]
