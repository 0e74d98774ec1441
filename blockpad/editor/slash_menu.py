"""
The slash-command menu.

Typing ``/`` in a block opens a menu of block types filtered by the text typed
after the slash. The menu state is an immutable value; every function here
returns a new state.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class SlashCommand:
    """
    A menu entry that converts the current block to ``type``.
    """
    type: str
    label: str
    keywords: Tuple[str, ...]

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against any keyword."""
        needle = query.lower()
        return any(needle in keyword for keyword in self.keywords)


def _command(block_type: str, label: str) -> SlashCommand:
    return SlashCommand(type=block_type, label=label, keywords=(label.lower(), block_type))


SLASH_COMMANDS: Tuple[SlashCommand, ...] = (
    _command("heading1", "Heading 1"),
    _command("heading2", "Heading 2"),
    _command("heading3", "Heading 3"),
    _command("paragraph", "Text"),
    _command("bullet", "Bullet list"),
    _command("numbered", "Numbered list"),
    _command("todo", "To-do"),
    _command("toggle", "Toggle"),
    _command("quote", "Quote"),
    _command("callout", "Callout"),
    _command("divider", "Divider"),
    _command("image", "Image"),
)


@dataclass(frozen=True)
class SlashMenuState:
    """
    An open slash menu anchored to one block.
    """
    block_id: str
    query: str = ""
    selected_index: int = 0

    @property
    def matches(self) -> List[SlashCommand]:
        """Commands matching the current query, in declaration order."""
        return match_commands(self.query)


def match_commands(query: str) -> List[SlashCommand]:
    """
    Return the commands whose keywords contain ``query``.

    An empty query matches every command.
    """
    return [command for command in SLASH_COMMANDS if command.matches(query)]


def clamp_index(index: int, count: int) -> int:
    """Clamp ``index`` into ``[0, count - 1]``; 0 when there is nothing to select."""
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


def open_menu(block_id: str) -> SlashMenuState:
    """Open the menu for a block with an empty query."""
    return SlashMenuState(block_id=block_id)


def with_query(state: SlashMenuState, query: str) -> SlashMenuState:
    """Change the filter query, keeping the selection inside the new match list."""
    count = len(match_commands(query))
    return replace(state, query=query, selected_index=clamp_index(state.selected_index, count))


def move_selection(state: SlashMenuState, delta: int) -> SlashMenuState:
    """Move the selection by ``delta`` entries, clamped to the match list."""
    count = len(state.matches)
    return replace(state, selected_index=clamp_index(state.selected_index + delta, count))


def selected_command(state: SlashMenuState) -> Optional[SlashCommand]:
    """Return the highlighted command, or None when nothing matches."""
    matches = state.matches
    if not matches:
        return None
    return matches[clamp_index(state.selected_index, len(matches))]
