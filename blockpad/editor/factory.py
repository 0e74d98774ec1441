"""
Block factory and type conversion.

New blocks start with empty payloads. Converting a block builds a fresh
default block of the target type and reattaches the original id, so the
payload is reset even when converting to the block's current type.
"""

import secrets
import string
from typing import Optional

from ..config import config
from ..models import Block, BLOCK_TYPES, parse_block

ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_id(size: Optional[int] = None) -> str:
    """
    Generate a random alphanumeric identifier.

    Args:
        size: Number of characters (defaults to ``editor.id_length``)

    Returns:
        The new identifier
    """
    length = size if size is not None else config.id_length
    return ''.join(secrets.choice(ID_ALPHABET) for _ in range(length))


def create_default_block(block_type: str) -> Block:
    """
    Create a new block of the given type with a fresh id and empty payload.

    Args:
        block_type: One of BLOCK_TYPES

    Returns:
        The new block

    Raises:
        ValueError: If the block type is unknown
    """
    if block_type not in BLOCK_TYPES:
        raise ValueError(f"Unknown block type: {block_type}")

    data = {"id": generate_id(), "type": block_type}
    if block_type == "callout":
        data["icon"] = config.callout_icon
        data["color"] = config.callout_color

    return parse_block(data)


def convert_block(block: Block, target_type: str) -> Block:
    """
    Convert a block to another type, keeping only its id.

    Args:
        block: The block to convert
        target_type: One of BLOCK_TYPES

    Returns:
        A new block of ``target_type`` with default payload and ``block.id``
    """
    return create_default_block(target_type).model_copy(update={"id": block.id})
