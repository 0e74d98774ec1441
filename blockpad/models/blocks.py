"""
Block data models for Blockpad.

A page is an ordered list of typed content blocks. Each block variant is a
frozen pydantic model; the variants are combined into a discriminated union
on the ``type`` field so raw dictionaries (storage rows, importer output)
validate into the right variant.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


TextType = Literal[
    "title", "heading1", "heading2", "heading3",
    "paragraph", "bullet", "numbered", "quote",
]

# Declaration order of every block type
BLOCK_TYPES = (
    "title",
    "heading1",
    "heading2",
    "heading3",
    "paragraph",
    "todo",
    "bullet",
    "numbered",
    "toggle",
    "quote",
    "divider",
    "callout",
    "image",
    "database_embed",
)

TEXT_TYPES = frozenset(
    ("title", "heading1", "heading2", "heading3", "paragraph", "bullet", "numbered", "quote")
)

LIST_TYPES = frozenset(("bullet", "numbered", "todo"))


class BaseBlock(BaseModel):
    """
    Fields shared by every block variant.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(
        ...,
        description="Stable identifier, unique within a document and kept across type conversions"
    )


class TextBlock(BaseBlock):
    """Titles, headings, paragraphs, list items and quotes."""

    type: TextType = Field(..., description="The text-like block type")
    text: str = Field(default="", description="The block's text content")


class TodoBlock(BaseBlock):
    """A checkable to-do item."""

    type: Literal["todo"] = "todo"
    text: str = Field(default="", description="The to-do's text content")
    checked: bool = Field(default=False, description="Whether the item is completed")


class ToggleBlock(BaseBlock):
    """
    A collapsible block with nested children.

    Children are only read when rendering; no editing operation mutates them.
    """

    type: Literal["toggle"] = "toggle"
    text: str = Field(default="", description="The toggle's summary text")
    open: bool = Field(default=False, description="Whether the children are expanded")
    children: List["Block"] = Field(
        default_factory=list,
        description="Nested blocks shown when the toggle is open"
    )


class DividerBlock(BaseBlock):
    """A horizontal rule with no payload."""

    type: Literal["divider"] = "divider"


class CalloutBlock(BaseBlock):
    """Highlighted text with an icon and background color."""

    type: Literal["callout"] = "callout"
    text: str = Field(default="", description="The callout's text content")
    icon: str = Field(default="💡", description="Emoji shown before the text")
    color: str = Field(default="#fef9c3", description="Background color")


class ImageBlock(BaseBlock):
    """An embedded image."""

    type: Literal["image"] = "image"
    url: str = Field(default="", description="Image source URL or data URI")
    caption: Optional[str] = Field(default=None, description="Optional caption")


class DatabaseEmbedBlock(BaseBlock):
    """A reference to a database file shown inline in the page."""

    type: Literal["database_embed"] = "database_embed"
    database_file_id: str = Field(
        default="",
        alias="databaseFileId",
        description="Identifier of the linked database file"
    )


Block = Annotated[
    Union[
        TextBlock,
        TodoBlock,
        ToggleBlock,
        DividerBlock,
        CalloutBlock,
        ImageBlock,
        DatabaseEmbedBlock,
    ],
    Field(discriminator="type"),
]

# Enable forward references for the self-referencing toggle model
ToggleBlock.model_rebuild()

_block_adapter = TypeAdapter(Block)
_block_list_adapter = TypeAdapter(List[Block])


def parse_block(data: Dict[str, Any]) -> Block:
    """
    Validate a raw dictionary into the matching block variant.

    Raises:
        pydantic.ValidationError: If the type is unknown or a field is invalid
    """
    return _block_adapter.validate_python(data)


def parse_blocks(data: List[Dict[str, Any]]) -> List[Block]:
    """Validate a list of raw dictionaries into blocks."""
    return _block_list_adapter.validate_python(data)


def dump_blocks(blocks: List[Block]) -> List[Dict[str, Any]]:
    """Serialize blocks to JSON-ready dictionaries using their wire names."""
    return [block.model_dump(by_alias=True, exclude_none=True) for block in blocks]


def is_text_bearing(block: Block) -> bool:
    """Return True if the block variant carries a ``text`` field."""
    return "text" in type(block).model_fields


def block_text(block: Block) -> str:
    """Return the block's text, or an empty string for blocks without text."""
    return getattr(block, "text", "") if is_text_bearing(block) else ""
