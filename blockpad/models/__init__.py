"""Data models for Blockpad."""

from .blocks import (
    Block,
    BaseBlock,
    TextBlock,
    TodoBlock,
    ToggleBlock,
    DividerBlock,
    CalloutBlock,
    ImageBlock,
    DatabaseEmbedBlock,
    BLOCK_TYPES,
    TEXT_TYPES,
    LIST_TYPES,
    parse_block,
    parse_blocks,
    dump_blocks,
    is_text_bearing,
    block_text,
)
from .documents import WorkspaceFile, PageDocument, PagePreview

__all__ = [
    "Block",
    "BaseBlock",
    "TextBlock",
    "TodoBlock",
    "ToggleBlock",
    "DividerBlock",
    "CalloutBlock",
    "ImageBlock",
    "DatabaseEmbedBlock",
    "BLOCK_TYPES",
    "TEXT_TYPES",
    "LIST_TYPES",
    "parse_block",
    "parse_blocks",
    "dump_blocks",
    "is_text_bearing",
    "block_text",
    "WorkspaceFile",
    "PageDocument",
    "PagePreview",
]
