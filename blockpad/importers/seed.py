"""
Seed importer for Blockpad.

This module provides the showcase page written into a fresh workspace,
demonstrating every block type the editor supports.
"""

from typing import List

from ..editor.factory import generate_id
from .base import BaseImporter, ImportedPage


class SeedImporter(BaseImporter):
    """
    Importer that returns the hardcoded showcase page.
    """

    def get_pages(self) -> List[ImportedPage]:
        """
        Return the seed pages.

        Returns:
            List containing the block showcase page
        """
        return [self._create_showcase_page()]

    def _create_showcase_page(self) -> ImportedPage:
        """
        Create the page that demonstrates every core block type.

        Returns:
            The showcase page with freshly generated block ids
        """
        raw_blocks = [
            {"type": "heading1", "text": "Welcome to Blockpad"},
            {"type": "paragraph", "text": "This page demonstrates every core block type available in the editor."},
            {"type": "heading2", "text": "Text Blocks"},
            {"type": "paragraph", "text": "Regular paragraph with plain text."},
            {"type": "heading3", "text": "Heading Level 3"},
            {"type": "heading2", "text": "Lists"},
            {"type": "bullet", "text": "Bullet item one"},
            {"type": "bullet", "text": "Bullet item two"},
            {"type": "bullet", "text": "Bullet item three"},
            {"type": "numbered", "text": "First numbered item"},
            {"type": "numbered", "text": "Second numbered item"},
            {"type": "numbered", "text": "Third numbered item"},
            {"type": "heading2", "text": "To-Do"},
            {"type": "todo", "text": "Set up project", "checked": True},
            {"type": "todo", "text": "Write documentation", "checked": False},
            {"type": "todo", "text": "Deploy to production", "checked": False},
            {"type": "heading2", "text": "Toggle"},
            {"type": "toggle", "text": "Click to expand hidden content", "open": False, "children": [
                {"type": "paragraph", "text": "This is the hidden content inside the toggle block."},
            ]},
            {"type": "heading2", "text": "Quote"},
            {"type": "quote", "text": "The best way to predict the future is to invent it. - Alan Kay"},
            {"type": "heading2", "text": "Callout"},
            {"type": "callout", "text": "This is a callout block. Great for tips and warnings.", "icon": "💡", "color": "#fef9c3"},
            {"type": "callout", "text": "Warning: Be careful with this operation.", "icon": "⚠️", "color": "#fecaca"},
            {"type": "heading2", "text": "Divider"},
            {"type": "divider"},
            {"type": "paragraph", "text": "Content after the divider continues here."},
            {"type": "heading2", "text": "Image"},
            {
                "type": "image",
                "url": "https://images.unsplash.com/photo-1555066931-4365d14bab8c?w=600&q=60",
                "caption": "A beautiful code screenshot",
            },
        ]

        return ImportedPage(
            title="Block Types Showcase",
            source_ref="seed",
            blocks=[self._with_ids(raw) for raw in raw_blocks]
        )

    def _with_ids(self, raw: dict) -> dict:
        block = dict(raw, id=generate_id())
        if "children" in block:
            block["children"] = [self._with_ids(child) for child in block["children"]]
        return block
