from types import SimpleNamespace

import pytest
from blockpad.importers import MarkdownImporter, parse_markdown

@pytest.fixture
def markdown_file(tmp_path):
    path = tmp_path / "groceries.md"
    path.write_text("""# Groceries

Weekly shopping list.
Second line.

- milk
* eggs
1. first
2. second
- [ ] call mom
- [x] pay rent
> quoted
!! careful
---
![Cat](https://example.com/cat.png)
""", encoding="utf-8")
    return path

def test_markdown_importer(markdown_file):
    importer = MarkdownImporter([markdown_file])
    pages = importer.get_pages()
    assert len(pages) == 1
    page = pages[0]
    assert page.title == "Groceries"
    assert page.source_ref == str(markdown_file)
    assert [b.type for b in page.blocks] == [
        "heading1", "paragraph", "bullet", "bullet", "numbered", "numbered",
        "todo", "todo", "quote", "callout", "divider", "image",
    ]
    assert page.blocks[1].text == "Weekly shopping list. Second line."
    assert page.blocks[6].text == "call mom"
    assert page.blocks[6].checked is False
    assert page.blocks[7].checked is True
    assert page.blocks[9].text == "careful"
    assert page.blocks[11].url == "https://example.com/cat.png"
    assert page.blocks[11].caption == "Cat"
    assert len({b.id for b in page.blocks}) == len(page.blocks)

def test_title_falls_back_to_file_name(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text("just text\n", encoding="utf-8")
    page = MarkdownImporter([path]).get_pages()[0]
    assert page.title == "notes"
    assert page.blocks[0].text == "just text"

def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        MarkdownImporter([tmp_path / "missing.md"]).get_pages()

def test_fenced_code_kept_verbatim():
    blocks = parse_markdown("```python\n# not a heading\n- not a bullet\n```\n")
    assert len(blocks) == 1
    assert blocks[0]["type"] == "paragraph"
    assert blocks[0]["text"] == "# not a heading\n- not a bullet"

def test_deep_headings_are_paragraphs():
    blocks = parse_markdown("#### too deep")
    assert blocks[0]["type"] == "paragraph"

def test_callout_uses_configured_style(monkeypatch):
    monkeypatch.setattr(
        "blockpad.importers.markdown.config",
        SimpleNamespace(callout_icon="⚠️", callout_color="#fecaca"),
    )
    blocks = parse_markdown("!! mind the gap")
    assert blocks[0]["type"] == "callout"
    assert blocks[0]["text"] == "mind the gap"
    assert (blocks[0]["icon"], blocks[0]["color"]) == ("⚠️", "#fecaca")
