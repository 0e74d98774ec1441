"""
The block editor as seen by its host.

The host owns the block list and passes a change callback. Every edit
produces a complete replacement list that is handed to ``on_change``; the
editor never persists anything itself.
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Union

from ..models import Block
from . import operations
from .keymap import EditorState, KeyEvent, handle_key, handle_input
from .rendering import BlockView, render_blocks
from .slash_menu import SlashMenuState

ChangeCallback = Callable[[List[Block]], object]


class BlockEditor:
    """
    Editing session over one page's blocks.

    Args:
        blocks: The page's current blocks
        on_change: Called with the full next block list after every edit;
            its return value is ignored
        read_only: When True every edit is refused and only ``render`` applies
    """

    def __init__(self, blocks: List[Block], on_change: ChangeCallback, read_only: bool = False):
        self.on_change = on_change
        self.read_only = read_only
        self.state = EditorState(blocks=list(blocks))

    @property
    def blocks(self) -> List[Block]:
        return self.state.blocks

    @property
    def slash_menu(self) -> Optional[SlashMenuState]:
        return self.state.slash_menu

    @property
    def focused_id(self) -> Optional[str]:
        return self.state.focused_id

    def sync(self, blocks: List[Block]) -> None:
        """
        Replace the block list with one pushed in by the host.

        The slash menu, focus and whole-block selection are dropped when their
        block is no longer on the page.
        """
        def still_present(block_id: Optional[str]) -> Optional[str]:
            if block_id is None or operations.find_block(blocks, block_id) is None:
                return None
            return block_id

        menu = self.state.slash_menu
        if menu is not None and still_present(menu.block_id) is None:
            menu = None
        self.state = replace(
            self.state,
            blocks=list(blocks),
            slash_menu=menu,
            focused_id=still_present(self.state.focused_id),
            selected_block_id=still_present(self.state.selected_block_id),
        )

    def _editable(self, action: str) -> bool:
        if self.read_only:
            logging.debug(f"Ignoring {action} in read-only editor")
            return False
        return True

    def _commit(self, state: EditorState) -> None:
        previous = self.state.blocks
        self.state = state
        changed = len(previous) != len(state.blocks) or any(
            old is not new for old, new in zip(previous, state.blocks)
        )
        if changed:
            self.on_change(list(state.blocks))

    def key_down(self, block_id: str, event: Union[KeyEvent, str]) -> bool:
        """
        Handle a key press in a block.

        Returns:
            True when the key was consumed and the native default must not run
        """
        if not self._editable("key press"):
            return False
        if isinstance(event, str):
            event = KeyEvent(key=event)

        result = handle_key(self.state, block_id, event)
        self._commit(result.state)
        return result.handled

    def input_text(self, block_id: str, text: str) -> None:
        """Handle the block's text changing to ``text``."""
        if self._editable("text input"):
            self._commit(handle_input(self.state, block_id, text))

    def update_block(self, block_id: str, patch: dict) -> None:
        if self._editable("update"):
            blocks = operations.update_block_by_id(self.state.blocks, block_id, patch)
            self._commit(replace(self.state, blocks=blocks))

    def insert_block_after(self, after_id: Optional[str], block_type: str = "paragraph") -> Optional[str]:
        """
        Insert a new block and focus it.

        Returns:
            The new block's id, or None in a read-only editor
        """
        if not self._editable("insert"):
            return None
        blocks, new_id = operations.insert_block_after(self.state.blocks, after_id, block_type)
        self._commit(replace(self.state, blocks=blocks, focused_id=new_id))
        return new_id

    def delete_block(self, block_id: str) -> None:
        if self._editable("delete"):
            blocks = operations.delete_block_by_id(self.state.blocks, block_id)
            self._commit(replace(self.state, blocks=blocks))

    def move_block(self, block_id: str, direction: str) -> None:
        if self._editable("move"):
            blocks = operations.move_block(self.state.blocks, block_id, direction)
            self._commit(replace(self.state, blocks=blocks))

    def toggle_checked(self, block_id: str) -> None:
        """Flip a to-do's checkbox."""
        block = operations.find_block(self.state.blocks, block_id)
        if block is not None and block.type == "todo":
            self.update_block(block_id, {"checked": not block.checked})

    def toggle_open(self, block_id: str) -> None:
        """Expand or collapse a toggle block."""
        block = operations.find_block(self.state.blocks, block_id)
        if block is not None and block.type == "toggle":
            self.update_block(block_id, {"open": not block.open})

    def render(self) -> List[BlockView]:
        return render_blocks(self.state.blocks)
