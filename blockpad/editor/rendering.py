"""
Read-only presentation of blocks.

``render_blocks`` turns a block list into ``BlockView`` records keyed by block
type; ``render_text`` and ``render_markdown`` flatten a page to text. All
functions are deterministic and have no side effects.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from ..models import Block, block_text
from .operations import numbering

HEADING_PREFIXES = {
    "title": "#",
    "heading1": "#",
    "heading2": "##",
    "heading3": "###",
}

NO_IMAGE = "No image"


class BlockView(BaseModel):
    """
    How a single block is presented when the page is read-only.
    """

    block_id: str
    type: str
    text: str = ""
    marker: Optional[str] = Field(
        None,
        description="Glyph shown before the text: bullet, ordinal, checkbox or toggle arrow"
    )
    checked: Optional[bool] = None
    strikethrough: bool = False
    italic: bool = False
    placeholder: Optional[str] = Field(
        None,
        description="Text shown in place of content that cannot be displayed"
    )
    url: Optional[str] = None
    caption: Optional[str] = None
    color: Optional[str] = None
    children: List[str] = Field(
        default_factory=list,
        description="Text of a toggle's direct children, shown when it is open"
    )


def render_block(block: Block, number: Optional[int] = None) -> BlockView:
    """
    Build the read-only view of one block.

    Args:
        block: The block to present
        number: Ordinal for numbered blocks

    Returns:
        The block's view
    """
    view = BlockView(block_id=block.id, type=block.type, text=block_text(block))

    if block.type == "bullet":
        view.marker = "•"
    elif block.type == "numbered":
        view.marker = f"{number if number is not None else 1}."
    elif block.type == "quote":
        view.italic = True
    elif block.type == "todo":
        view.checked = block.checked
        view.marker = "☑" if block.checked else "☐"
        view.strikethrough = block.checked
    elif block.type == "toggle":
        view.marker = "▼" if block.open else "▶"
        if block.open:
            # One level only: nested toggles are not expanded
            view.children = [block_text(child) for child in block.children]
    elif block.type == "callout":
        view.marker = block.icon
        view.color = block.color
    elif block.type == "image":
        if block.url:
            view.url = block.url
            view.caption = block.caption
        else:
            view.placeholder = NO_IMAGE
    elif block.type == "database_embed":
        view.placeholder = f"Embedded database: {block.database_file_id}"

    return view


def render_blocks(blocks: List[Block]) -> List[BlockView]:
    """Build the read-only view of every block, numbering each numbered run."""
    return [
        render_block(block, number)
        for block, number in zip(blocks, numbering(blocks))
    ]


def _text_lines(view: BlockView) -> List[str]:
    if view.type == "divider":
        return ["───"]
    if view.type == "image":
        if view.placeholder:
            return [f"[{view.placeholder}]"]
        label = f"Image: {view.caption}" if view.caption else "Image"
        return [f"[{label}] {view.url}"]
    if view.type == "database_embed":
        return [f"[{view.placeholder}]"]
    if view.type == "quote":
        return [f"│ {view.text}"]

    line = f"{view.marker} {view.text}" if view.marker else view.text
    return [line] + [f"    {child}" for child in view.children]


def render_text(blocks: List[Block]) -> str:
    """Render a page as plain text, one block per line."""
    lines: List[str] = []
    for view in render_blocks(blocks):
        lines.extend(_text_lines(view))
    return "\n".join(lines)


def _markdown(block: Block, number: Optional[int]) -> str:
    text = block_text(block)
    if block.type in HEADING_PREFIXES:
        return f"{HEADING_PREFIXES[block.type]} {text}"
    if block.type == "bullet":
        return f"- {text}"
    if block.type == "numbered":
        return f"{number}. {text}"
    if block.type == "quote":
        return f"> {text}"
    if block.type == "todo":
        return f"- [{'x' if block.checked else ' '}] {text}"
    if block.type == "toggle":
        children = "\n".join(block_text(child) for child in block.children)
        return f"<details>\n<summary>{text}</summary>\n\n{children}\n</details>"
    if block.type == "callout":
        return f"> {block.icon} {text}"
    if block.type == "divider":
        return "---"
    if block.type == "image":
        return f"![{block.caption or ''}]({block.url})" if block.url else ""
    if block.type == "database_embed":
        return f"<!-- database: {block.database_file_id} -->"
    return text


def render_markdown(blocks: List[Block]) -> str:
    """
    Export a page as Markdown.

    Consecutive list items are kept on adjacent lines; other blocks are
    separated by a blank line.
    """
    list_like = ("bullet", "numbered", "todo")
    parts: List[str] = []
    previous_type = None
    for block, number in zip(blocks, numbering(blocks)):
        chunk = _markdown(block, number)
        if not chunk:
            continue
        if parts:
            joined_list = previous_type in list_like and block.type in list_like
            parts.append("\n" if joined_list else "\n\n")
        parts.append(chunk)
        previous_type = block.type
    return "".join(parts) + "\n" if parts else ""
