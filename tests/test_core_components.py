"""
Unit tests for core Blockpad components.

Tests configuration management, data models, page storage, previews,
the seed importer and utility functions.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from blockpad.config import ConfigManager
from blockpad.database import DatabaseManager
from blockpad.importers import SeedImporter
from blockpad.models import (
    BLOCK_TYPES,
    PageDocument,
    TextBlock,
    TodoBlock,
    ToggleBlock,
    ImageBlock,
    DatabaseEmbedBlock,
    WorkspaceFile,
    parse_block,
    parse_blocks,
    dump_blocks,
    block_text,
)
from blockpad.previews import extract_snippet, extract_image, build_page_preview


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.database_filename, "blockpad.db")
        self.assertEqual(config.id_length, 12)
        self.assertEqual(config.callout_icon, "💡")
        self.assertEqual(config.snippet_length, 120)

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
database:
  filename: "test.db"

editor:
  id_length: 8
  callout_color: "#000000"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.database_filename, "test.db")
        self.assertEqual(config.id_length, 8)
        self.assertEqual(config.callout_color, "#000000")
        # Missing keys fall back to property defaults
        self.assertEqual(config.snippet_length, 120)

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))  # Uses defaults

        self.assertEqual(config.get("editor.id_length"), 12)
        self.assertEqual(config.get("paths.export_dir"), "export")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertIn("level", config.get_section("logging"))

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("previews:\n  snippet_length: 40")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.snippet_length, 40)

        with open(self.config_path, 'w') as f:
            f.write("previews:\n  snippet_length: 80")

        config.reload()
        self.assertEqual(config.snippet_length, 80)


class TestDataModels(unittest.TestCase):
    """Test block model validation and serialization."""

    def test_discriminated_parsing(self):
        """Test raw dicts validate into the right variant."""
        blocks = parse_blocks([
            {"id": "a", "type": "heading2", "text": "Title"},
            {"id": "b", "type": "todo", "text": "Task", "checked": True},
            {"id": "c", "type": "database_embed", "databaseFileId": "db1"},
            {"id": "d", "type": "toggle", "text": "More", "children": [
                {"id": "e", "type": "paragraph", "text": "Inside"}
            ]},
        ])

        self.assertIsInstance(blocks[0], TextBlock)
        self.assertIsInstance(blocks[1], TodoBlock)
        self.assertTrue(blocks[1].checked)
        self.assertIsInstance(blocks[2], DatabaseEmbedBlock)
        self.assertEqual(blocks[2].database_file_id, "db1")
        self.assertIsInstance(blocks[3], ToggleBlock)
        self.assertEqual(blocks[3].children[0].text, "Inside")

    def test_unknown_type_rejected(self):
        with self.assertRaises(ValidationError):
            parse_block({"id": "a", "type": "spreadsheet"})

    def test_blocks_are_immutable(self):
        block = TextBlock(id="a", type="paragraph", text="x")
        with self.assertRaises(ValidationError):
            block.text = "y"

    def test_dump_uses_wire_names(self):
        dumped = dump_blocks([
            DatabaseEmbedBlock(id="c", databaseFileId="db1"),
            ImageBlock(id="i", url="u"),
        ])
        self.assertEqual(dumped[0], {"id": "c", "type": "database_embed", "databaseFileId": "db1"})
        self.assertEqual(dumped[1], {"id": "i", "type": "image", "url": "u"})
        self.assertEqual(parse_blocks(dumped)[0].database_file_id, "db1")

    def test_block_text(self):
        self.assertEqual(block_text(TodoBlock(id="a", text="x")), "x")
        self.assertEqual(block_text(ImageBlock(id="b", url="u")), "")


class TestDatabaseManager(unittest.TestCase):
    """Test page storage."""

    def setUp(self):
        """Set up test database."""
        self.temp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.temp_dir) / "test.db"

    def tearDown(self):
        """Clean up test database."""
        for path in Path(self.temp_dir).iterdir():
            path.unlink()
        os.rmdir(self.temp_dir)

    def test_connection_required(self):
        db = DatabaseManager(str(self.db_path))
        with self.assertRaises(RuntimeError):
            db.initialize_database()

    def test_page_round_trip(self):
        """Test creating and loading a page with every kind of block."""
        page = SeedImporter().get_pages()[0]

        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            page_id = db.create_page(title=page.title, blocks=page.blocks)

            loaded = db.get_page(page_id)
            self.assertIsNotNone(loaded)
            if loaded:  # Type guard for linter
                self.assertEqual(loaded.blocks, page.blocks)

            file = db.get_file(page_id)
            self.assertIsNotNone(file)
            if file:  # Type guard for linter
                self.assertEqual(file.title, "Block Types Showcase")
                self.assertEqual(file.author, "You")

    def test_update_page(self):
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            first = db.create_page(title="First")
            second = db.create_page(title="Second")

            blocks = [TextBlock(id="a", type="paragraph", text="hello")]
            self.assertTrue(db.update_page(first, blocks))
            self.assertEqual(db.get_page(first).blocks, blocks)

            # Most recently updated first
            self.assertEqual([f.id for f in db.list_files()], [first, second])

            self.assertFalse(db.update_page("missing", blocks))
            self.assertIsNone(db.get_page("missing"))

    def test_duplicate_page_id_rejected(self):
        """Test a clashing id leaves no partial rows behind."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            with patch("blockpad.database.manager.generate_id", return_value="same"):
                self.assertEqual(db.create_page(title="First"), "same")
                self.assertIsNone(db.create_page(title="Second"))

            self.assertEqual([f.title for f in db.list_files()], ["First"])
            self.assertEqual(db.get_page("same").blocks, [])

            # Connection still usable after the rollback
            self.assertIsNotNone(db.create_page(title="Third"))
            self.assertEqual(len(db.list_files()), 2)

    def test_update_and_delete_file(self):
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            page_id = db.create_page(title="Draft", tags=["work"])

            self.assertTrue(db.update_file(page_id, title="Final"))
            file = db.get_file(page_id)
            self.assertEqual(file.title, "Final")
            self.assertEqual(file.tags, ["work"])

            self.assertTrue(db.delete_file(page_id))
            self.assertIsNone(db.get_file(page_id))
            self.assertIsNone(db.get_page(page_id))
            self.assertFalse(db.delete_file(page_id))

    def test_seeded_flag(self):
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            self.assertFalse(db.is_seeded())
            db.mark_seeded()
            db.mark_seeded()
            self.assertTrue(db.is_seeded())


class TestPreviews(unittest.TestCase):
    """Test page previews."""

    def setUp(self):
        self.doc = PageDocument(id="p", blocks=[
            {"id": "a", "type": "divider"},
            {"id": "b", "type": "paragraph", "text": "   "},
            {"id": "c", "type": "todo", "text": "  First real text  "},
            {"id": "d", "type": "image", "url": "https://example.com/img.png"},
        ])

    def test_snippet_skips_blank_blocks(self):
        self.assertEqual(extract_snippet(self.doc), "First real text")

    def test_snippet_truncated(self):
        self.assertEqual(extract_snippet(self.doc, max_len=5), "First…")
        self.assertEqual(extract_snippet(None), "")

    def test_preview_image(self):
        self.assertEqual(extract_image(self.doc), "https://example.com/img.png")

        file = WorkspaceFile(id="p", title="Page", cover_image_url="https://example.com/cover.png")
        empty = PageDocument(id="p", blocks=[])
        self.assertEqual(build_page_preview(file, empty).image_url, "https://example.com/cover.png")
        self.assertEqual(build_page_preview(file, self.doc).image_url, "https://example.com/img.png")


class TestSeedImporter(unittest.TestCase):
    """Test the showcase seed page."""

    def test_showcase_page(self):
        pages = SeedImporter().get_pages()
        self.assertEqual(len(pages), 1)

        blocks = pages[0].blocks
        types = {block.type for block in blocks}
        self.assertEqual(set(BLOCK_TYPES) - types, {"title", "database_embed"})

        ids = [block.id for block in blocks]
        ids.extend(child.id for block in blocks if block.type == "toggle" for child in block.children)
        self.assertEqual(len(ids), len(set(ids)))


class TestUtilityFunctions(unittest.TestCase):
    """Test utility functions."""

    def test_safe_filename_generation(self):
        """Test safe filename generation from page titles."""
        from main import safe_filename

        self.assertEqual(safe_filename("Meeting Notes"), "Meeting_Notes")
        self.assertEqual(safe_filename("a/b\\c"), "a_b_c")
        self.assertEqual(safe_filename("???"), "Untitled")

    def test_cli_exit_codes(self):
        """Test an interrupt exits cleanly while a failure exits with status 1."""
        import main

        temp_dir = tempfile.mkdtemp()
        db_path = str(Path(temp_dir) / "cli.db")
        try:
            with patch.object(main, "setup_logging"):
                with patch.object(main, "run_list", side_effect=KeyboardInterrupt):
                    main.main(["--db", db_path, "list"])

                with patch.object(main, "run_list", side_effect=RuntimeError("boom")):
                    with self.assertRaises(SystemExit) as raised:
                        main.main(["--db", db_path, "list"])
                    self.assertEqual(raised.exception.code, 1)
        finally:
            for path in Path(temp_dir).iterdir():
                path.unlink()
            os.rmdir(temp_dir)


if __name__ == '__main__':
    # Run all tests
    unittest.main()
