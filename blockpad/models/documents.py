"""
Page and workspace file models for Blockpad.

This module defines the records the page store persists and the preview
shown for a page on the dashboard.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from .blocks import Block


class WorkspaceFile(BaseModel):
    """
    The top-level record listed in the sidebar for every page.
    """

    id: str = Field(
        ...,
        description="Identifier shared with the page document"
    )

    title: str = Field(
        default="Untitled",
        description="The page title shown in navigation"
    )

    author: str = Field(
        default="You",
        description="Display name of the page's author"
    )

    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the page was created"
    )

    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="When the page or its blocks were last changed"
    )

    cover_image_url: Optional[str] = Field(
        None,
        description="Optional cover image shown above the page"
    )

    tags: List[str] = Field(
        default_factory=list,
        description="Free-form tags"
    )


class PageDocument(BaseModel):
    """
    The content of a page: an ordered list of blocks.
    """

    id: str = Field(
        ...,
        description="Matches WorkspaceFile.id"
    )

    blocks: List[Block] = Field(
        default_factory=list,
        description="The page's blocks in display order"
    )


class PagePreview(BaseModel):
    """
    A compact summary of a page for dashboard cards.
    """

    file: WorkspaceFile
    snippet: str = Field(
        default="",
        description="The first non-blank text in the page, truncated"
    )
    image_url: Optional[str] = Field(
        None,
        description="The first image in the page, or the file's cover image"
    )
