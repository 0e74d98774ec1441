"""
Blockpad: a block-based page editor and workspace store.

Pages are ordered lists of typed blocks edited through a keyboard-driven
state machine and persisted in DuckDB.
"""

__version__ = "0.1.0"
__author__ = "Blockpad Project"

# Import main components
from .database import DatabaseManager
from .models import Block, PageDocument, WorkspaceFile
from .editor import BlockEditor
from .importers import BaseImporter, SeedImporter, MarkdownImporter

__all__ = [
    "DatabaseManager",
    "Block",
    "PageDocument",
    "WorkspaceFile",
    "BlockEditor",
    "BaseImporter",
    "SeedImporter",
    "MarkdownImporter"
]
