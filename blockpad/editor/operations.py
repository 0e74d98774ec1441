"""
Editing operations over a page's block list.

Every operation returns a new list and never mutates its input or the blocks
in it. Blocks that are not touched are returned by reference. Requests that
cannot be honoured (unknown id, deleting the last block, moving past either
end) are refused by returning an equal list instead of raising.
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import ValidationError

from ..models import Block, parse_block
from .factory import create_default_block


class InsertResult(NamedTuple):
    """The block list after an insert, and the id of the inserted block."""
    blocks: List[Block]
    new_id: str


def find_index(blocks: List[Block], block_id: str) -> int:
    """Return the index of the block with the given id, or -1."""
    for index, block in enumerate(blocks):
        if block.id == block_id:
            return index
    return -1


def find_block(blocks: List[Block], block_id: str) -> Optional[Block]:
    """Return the block with the given id, or None."""
    index = find_index(blocks, block_id)
    return blocks[index] if index >= 0 else None


def replace_block(blocks: List[Block], replacement: Block) -> List[Block]:
    """Return a list with the block sharing ``replacement.id`` swapped out."""
    return [replacement if block.id == replacement.id else block for block in blocks]


def _apply_patch(block: Block, patch: Dict[str, Any]) -> Block:
    fields = type(block).model_fields
    aliases = {info.alias: name for name, info in fields.items() if info.alias}

    changes: Dict[str, Any] = {}
    for key, value in patch.items():
        name = aliases.get(key, key)
        if name in ("id", "children"):
            logging.debug(f"Ignoring read-only field '{name}' in patch for block {block.id}")
            continue
        changes[name] = value

    # Re-validate the merged fields; a changed type selects the new variant and
    # missing fields take their defaults
    data = block.model_dump()
    data.update(changes)
    data["id"] = block.id
    try:
        return parse_block(data)
    except ValidationError as e:
        logging.debug(f"Rejected patch for block {block.id}: {e.error_count()} invalid field(s)")
        return block


def update_block_by_id(blocks: List[Block], block_id: str, patch: Dict[str, Any]) -> List[Block]:
    """
    Shallow-merge ``patch`` onto the block with the given id.

    Args:
        blocks: The current block list
        block_id: Id of the block to update
        patch: Field values to overwrite; fields not on the block's variant are
            ignored and the id is never changed

    Returns:
        The updated block list (an equal list if the id is unknown)
    """
    if find_index(blocks, block_id) < 0:
        logging.debug(f"update_block_by_id: unknown block {block_id}")
        return list(blocks)

    return [_apply_patch(block, patch) if block.id == block_id else block for block in blocks]


def insert_block_after(blocks: List[Block], after_id: Optional[str], block_type: str = "paragraph") -> InsertResult:
    """
    Insert a new default block immediately after another block.

    Args:
        blocks: The current block list
        after_id: Id of the block to insert after; None (or an unknown id)
            appends to the end
        block_type: Type of the new block

    Returns:
        InsertResult with the new list and the new block's id
    """
    new_block = create_default_block(block_type)
    index = find_index(blocks, after_id) if after_id is not None else -1
    if index < 0:
        if after_id is not None:
            logging.debug(f"insert_block_after: unknown block {after_id}, appending")
        index = len(blocks) - 1

    next_blocks = list(blocks)
    next_blocks.insert(index + 1, new_block)
    return InsertResult(next_blocks, new_block.id)


def delete_block_by_id(blocks: List[Block], block_id: str) -> List[Block]:
    """
    Remove the block with the given id.

    The last remaining block is never deleted.
    """
    if len(blocks) <= 1:
        logging.debug("delete_block_by_id: refusing to delete the last block")
        return list(blocks)

    return [block for block in blocks if block.id != block_id]


def move_block(blocks: List[Block], block_id: str, direction: str) -> List[Block]:
    """
    Swap a block with its neighbour above or below.

    Args:
        blocks: The current block list
        block_id: Id of the block to move
        direction: "up" or "down"

    Returns:
        The reordered list (an equal list at either boundary or for an unknown id)

    Raises:
        ValueError: If direction is not "up" or "down"
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Invalid direction: {direction}")

    index = find_index(blocks, block_id)
    swap = index - 1 if direction == "up" else index + 1
    if index < 0 or swap < 0 or swap >= len(blocks):
        logging.debug(f"move_block: cannot move {block_id} {direction}")
        return list(blocks)

    next_blocks = list(blocks)
    next_blocks[index], next_blocks[swap] = next_blocks[swap], next_blocks[index]
    return next_blocks


def number_for_index(blocks: List[Block], index: int) -> int:
    """
    Return the displayed ordinal for the block at ``index``.

    For a numbered block this is its position within the contiguous run of
    numbered blocks ending at ``index``; any other block type breaks the run.
    For other blocks it is simply ``index + 1``.
    """
    if not 0 <= index < len(blocks) or blocks[index].type != "numbered":
        return index + 1

    number = 1
    position = index - 1
    while position >= 0 and blocks[position].type == "numbered":
        number += 1
        position -= 1
    return number


def numbering(blocks: List[Block]) -> List[Optional[int]]:
    """
    Compute the ordinal of every numbered block in a single pass.

    Returns:
        One entry per block: its number for numbered blocks, None otherwise
    """
    numbers: List[Optional[int]] = []
    run = 0
    for block in blocks:
        if block.type == "numbered":
            run += 1
            numbers.append(run)
        else:
            run = 0
            numbers.append(None)
    return numbers
