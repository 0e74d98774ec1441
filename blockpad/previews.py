"""
Dashboard previews for pages.
"""

from typing import Optional

from .config import config
from .models import PageDocument, PagePreview, WorkspaceFile, block_text


def extract_snippet(doc: Optional[PageDocument], max_len: Optional[int] = None) -> str:
    """
    Return the first non-blank block text in a page, truncated with an ellipsis.

    Args:
        doc: The page document (None yields an empty snippet)
        max_len: Maximum length before truncation (defaults to ``previews.snippet_length``)
    """
    if doc is None:
        return ""
    limit = max_len if max_len is not None else config.snippet_length

    for block in doc.blocks:
        text = block_text(block).strip()
        if text:
            return text[:limit] + "…" if len(text) > limit else text
    return ""


def extract_image(doc: Optional[PageDocument]) -> Optional[str]:
    """Return the url of the first image block in a page, if any."""
    if doc is None:
        return None
    for block in doc.blocks:
        if block.type == "image":
            return block.url
    return None


def build_page_preview(file: WorkspaceFile, doc: Optional[PageDocument]) -> PagePreview:
    """Summarize a page for a dashboard card."""
    return PagePreview(
        file=file,
        snippet=extract_snippet(doc),
        image_url=extract_image(doc) or file.cover_image_url
    )
