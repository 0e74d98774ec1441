"""
Keyboard and text-input handling for the block editor.

The editor's input behaviour is expressed as pure functions of
``(EditorState, event) -> new state``. ``handle_key`` runs on key-down and
decides whether the native default should be prevented; ``handle_input``
runs after the block's text has changed.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from ..models import Block, LIST_TYPES, is_text_bearing, block_text
from .factory import convert_block
from .operations import (
    find_block,
    find_index,
    replace_block,
    update_block_by_id,
    insert_block_after,
    delete_block_by_id,
)
from .slash_menu import SlashMenuState, open_menu, with_query, move_selection, selected_command

# Typed at the start of a block and followed by a space
SHORTCUTS = {
    "#": "heading1",
    "##": "heading2",
    "###": "heading3",
    ">": "quote",
    "-": "bullet",
    "*": "bullet",
    "1.": "numbered",
    "[]": "todo",
    "[ ]": "todo",
    "!!": "callout",
}

# Pressing these alone does not change the selection
MODIFIER_KEYS = frozenset({"Shift", "Control", "Meta", "Alt"})


@dataclass(frozen=True)
class KeyEvent:
    """A key-down event with its modifier state."""
    key: str
    shift: bool = False
    ctrl: bool = False
    meta: bool = False
    alt: bool = False

    @property
    def has_modifier(self) -> bool:
        """True when Ctrl, Cmd/Meta or Alt is held."""
        return self.ctrl or self.meta or self.alt

    @property
    def is_select_all(self) -> bool:
        """True for Ctrl+A or Cmd+A."""
        return self.key.lower() == "a" and (self.ctrl or self.meta)


@dataclass(frozen=True)
class EditorState:
    """
    Everything the editor tracks for one edit session.

    Attributes:
        blocks: The page's blocks, owned by the host
        slash_menu: The open slash menu, if any
        focused_id: The block that should hold the caret
        selected_block_id: The block whose whole text is selected (Ctrl/Cmd+A)
    """
    blocks: List[Block] = field(default_factory=list)
    slash_menu: Optional[SlashMenuState] = None
    focused_id: Optional[str] = None
    selected_block_id: Optional[str] = None


@dataclass(frozen=True)
class KeyResult:
    """The state after a key press, and whether the native default is prevented."""
    state: EditorState
    handled: bool


def _menu_for(state: EditorState, block_id: str) -> Optional[SlashMenuState]:
    menu = state.slash_menu
    return menu if menu is not None and menu.block_id == block_id else None


def _convert(state: EditorState, block: Block, target_type: str) -> EditorState:
    blocks = replace_block(state.blocks, convert_block(block, target_type))
    return replace(state, blocks=blocks, slash_menu=None, focused_id=block.id)


def handle_key(state: EditorState, block_id: str, event: KeyEvent) -> KeyResult:
    """
    Apply one key-down event to the block with the given id.

    Args:
        state: The current editor state
        block_id: The block that has focus
        event: The key press

    Returns:
        KeyResult with the next state; ``handled`` is True when the key was
        consumed and the native behaviour must not run
    """
    block = find_block(state.blocks, block_id)
    if block is None:
        logging.debug(f"handle_key: unknown block {block_id}")
        return KeyResult(state, False)

    if state.selected_block_id is not None and not event.is_select_all and event.key not in MODIFIER_KEYS:
        state = replace(state, selected_block_id=None)

    menu = _menu_for(state, block_id)
    if menu is not None:
        if event.key in ("ArrowDown", "ArrowUp"):
            delta = 1 if event.key == "ArrowDown" else -1
            return KeyResult(replace(state, slash_menu=move_selection(menu, delta)), True)

        if event.key == "Escape":
            return KeyResult(replace(state, slash_menu=None), True)

        if event.key == "Enter":
            command = selected_command(menu)
            if command is not None:
                logging.debug(f"Slash command {command.type} on block {block_id}")
                return KeyResult(_convert(state, block, command.type), True)
            # Nothing to commit: close the menu and treat Enter normally
            state = replace(state, slash_menu=None)

    if event.has_modifier and event.key != "/":
        if event.is_select_all:
            return KeyResult(replace(state, selected_block_id=block_id), True)
        return KeyResult(state, False)

    if event.key == "/" and not event.has_modifier:
        # The slash itself is still typed into the block
        return KeyResult(replace(state, slash_menu=open_menu(block_id)), False)

    if event.key == " " and is_text_bearing(block):
        target_type = SHORTCUTS.get(block_text(block).strip())
        if target_type is not None:
            return KeyResult(_convert(state, block, target_type), True)

    if event.key == "Enter" and not event.shift and block.type in LIST_TYPES:
        if not block_text(block):
            return KeyResult(_convert(state, block, "paragraph"), True)
        blocks, new_id = insert_block_after(state.blocks, block_id, block.type)
        return KeyResult(replace(state, blocks=blocks, focused_id=new_id), True)

    if event.key == "Backspace" and not block_text(block):
        index = find_index(state.blocks, block_id)
        blocks = delete_block_by_id(state.blocks, block_id)
        focused_id = block_id
        if len(blocks) < len(state.blocks):
            focused_id = blocks[index - 1].id if index > 0 else blocks[0].id
        slash_menu = None if menu is not None else state.slash_menu
        return KeyResult(replace(state, blocks=blocks, focused_id=focused_id, slash_menu=slash_menu), True)

    return KeyResult(state, False)


def handle_input(state: EditorState, block_id: str, text: str) -> EditorState:
    """
    Apply new text typed into a block.

    Text starting with ``/`` (re)opens the slash menu with the rest of the text
    as its query; any other text closes a menu open on this block.
    """
    if find_block(state.blocks, block_id) is None:
        logging.debug(f"handle_input: unknown block {block_id}")
        return state

    blocks = update_block_by_id(state.blocks, block_id, {"text": text})
    menu = state.slash_menu
    if text.startswith("/"):
        menu = with_query(_menu_for(state, block_id) or open_menu(block_id), text[1:])
    elif _menu_for(state, block_id) is not None:
        menu = None

    return replace(state, blocks=blocks, slash_menu=menu, focused_id=block_id, selected_block_id=None)
