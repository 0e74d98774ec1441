"""Block editor: factory, editing operations, input handling and rendering."""

from .factory import generate_id, create_default_block, convert_block
from .operations import (
    InsertResult,
    update_block_by_id,
    insert_block_after,
    delete_block_by_id,
    move_block,
    number_for_index,
    numbering,
)
from .slash_menu import SlashCommand, SlashMenuState, SLASH_COMMANDS, match_commands
from .keymap import KeyEvent, EditorState, KeyResult, SHORTCUTS, handle_key, handle_input
from .rendering import BlockView, render_blocks, render_text, render_markdown
from .session import BlockEditor

__all__ = [
    "generate_id",
    "create_default_block",
    "convert_block",
    "InsertResult",
    "update_block_by_id",
    "insert_block_after",
    "delete_block_by_id",
    "move_block",
    "number_for_index",
    "numbering",
    "SlashCommand",
    "SlashMenuState",
    "SLASH_COMMANDS",
    "match_commands",
    "KeyEvent",
    "EditorState",
    "KeyResult",
    "SHORTCUTS",
    "handle_key",
    "handle_input",
    "BlockView",
    "render_blocks",
    "render_text",
    "render_markdown",
    "BlockEditor",
]
