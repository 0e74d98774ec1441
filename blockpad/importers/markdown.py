"""
Markdown importer for Blockpad.

This module converts Markdown files into pages using a small line-based
parser. Line prefixes map to block types with the same tokens the editor
accepts as typing shortcuts.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config import config
from ..editor.factory import generate_id
from ..editor.keymap import SHORTCUTS
from .base import BaseImporter, ImportedPage

TODO_PATTERN = re.compile(r"^[-*]\s+\[( |x|X)?\]\s*(.*)$")
IMAGE_PATTERN = re.compile(r"^!\[([^\]]*)\]\(([^)\s]*)\)$")
PREFIX_PATTERN = re.compile(r"^(#{1,3}|>|[-*]|\d+\.|!!)\s+(.*)$")
DIVIDERS = ("---", "***", "___")


class MarkdownImporter(BaseImporter):
    """
    Importer that reads one page from each Markdown file.
    """

    def __init__(self, paths: List[Union[str, Path]]):
        """
        Initialize the Markdown importer.

        Args:
            paths: Markdown files to import
        """
        self.paths = [Path(path) for path in paths]

    def get_pages(self) -> List[ImportedPage]:
        """
        Parse every configured file into a page.

        Returns:
            One ImportedPage per file

        Raises:
            FileNotFoundError: If a file does not exist
        """
        pages = []
        for path in self.paths:
            if not path.is_file():
                raise FileNotFoundError(f"Markdown file not found: {path}")

            text = path.read_text(encoding='utf-8')
            blocks = parse_markdown(text)
            pages.append(ImportedPage(
                title=self._title_for(path, blocks),
                source_ref=str(path),
                blocks=blocks
            ))
            logging.info(f"Imported {len(blocks)} blocks from {path}")
        return pages

    def _title_for(self, path: Path, blocks: List[Dict[str, Any]]) -> str:
        """Use the first level-1 heading as the title, else the file name."""
        for block in blocks:
            if block["type"] == "heading1" and block["text"]:
                return block["text"]
        return path.stem


def _block(block_type: str, **fields) -> Dict[str, Any]:
    return dict(fields, id=generate_id(), type=block_type)


def _parse_line(stripped: str) -> Optional[Dict[str, Any]]:
    if stripped in DIVIDERS:
        return _block("divider")

    match = IMAGE_PATTERN.match(stripped)
    if match:
        caption, url = match.groups()
        return _block("image", url=url, caption=caption or None)

    match = TODO_PATTERN.match(stripped)
    if match:
        mark, text = match.groups()
        return _block("todo", text=text.strip(), checked=bool(mark and mark.strip()))

    match = PREFIX_PATTERN.match(stripped)
    if match:
        token, text = match.groups()
        if token[0].isdigit():
            token = "1."
        block_type = SHORTCUTS[token]
        if block_type == "callout":
            return _block(block_type, text=text.strip(), icon=config.callout_icon, color=config.callout_color)
        return _block(block_type, text=text.strip())

    return None


def parse_markdown(text: str) -> List[Dict[str, Any]]:
    """
    Parse Markdown into raw block dictionaries.

    Consecutive plain lines are joined into one paragraph; blank lines end a
    paragraph. Fenced code is kept verbatim as a paragraph.
    """
    blocks: List[Dict[str, Any]] = []
    paragraph: List[str] = []

    def flush():
        if paragraph:
            blocks.append(_block("paragraph", text=" ".join(paragraph)))
            paragraph.clear()

    lines = text.splitlines()
    i = 0
    while i < len(lines):
        stripped = lines[i].strip()
        i += 1

        if not stripped:
            flush()
            continue

        if stripped.startswith("```"):
            flush()
            code_lines = []
            while i < len(lines) and not lines[i].strip().startswith("```"):
                code_lines.append(lines[i])
                i += 1
            i += 1
            blocks.append(_block("paragraph", text="\n".join(code_lines)))
            continue

        block = _parse_line(stripped)
        if block is None:
            paragraph.append(stripped)
            continue

        flush()
        blocks.append(block)

    flush()
    return blocks
