"""
Base importer interface for Blockpad.

This module defines the abstract interface that all page importers must implement.
"""

from abc import ABC, abstractmethod
from typing import List

from pydantic import BaseModel, Field

from ..models import Block


class ImportedPage(BaseModel):
    """
    A page produced by an importer, ready to be stored.
    """

    title: str = Field(
        ...,
        description="Title for the new page"
    )

    source_ref: str = Field(
        ...,
        description="A human-readable reference to the source (e.g., file path)"
    )

    blocks: List[Block] = Field(
        default_factory=list,
        description="The page's blocks in display order"
    )


class BaseImporter(ABC):
    """
    Abstract base class for all page importers.

    Each importer converts data from a specific source (seed content, Markdown
    files, ...) into pages of blocks.
    """

    @abstractmethod
    def get_pages(self) -> List[ImportedPage]:
        """
        Retrieve all pages from the data source.

        Returns:
            List of ImportedPage objects
        """
        pass
