#!/usr/bin/env python3
"""
Blockpad - Block-based page editor

Command line host for Blockpad. It owns the page store, hands pages to the
block editor and persists every change the editor reports.
"""

import logging
import sys
import argparse
from pathlib import Path
from typing import List

from blockpad.database import DatabaseManager
from blockpad.editor import BlockEditor, create_default_block, render_text, render_markdown
from blockpad.importers import BaseImporter, SeedImporter, MarkdownImporter
from blockpad.models import BLOCK_TYPES
from blockpad.previews import build_page_preview
from blockpad.config import config


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def safe_filename(title: str) -> str:
    """
    Create a filesystem-safe file name from a page title.

    Args:
        title: The page title

    Returns:
        The file name without extension
    """
    safe_name = title.replace(' ', '_').replace('/', '_').replace('\\', '_')
    safe_name = ''.join(c for c in safe_name if c.isalnum() or c in '_-')
    return safe_name or "Untitled"


def import_pages(db: DatabaseManager, importer: BaseImporter) -> List[str]:
    """
    Store every page an importer produces.

    Returns:
        The ids of the created pages
    """
    page_ids = []
    for page in importer.get_pages():
        page_id = db.create_page(title=page.title, blocks=page.blocks)
        if page_id is None:
            logging.warning(f"Skipped page '{page.title}' from {page.source_ref}")
            continue
        logging.info(f"Imported page '{page.title}' from {page.source_ref} as {page_id}")
        page_ids.append(page_id)
    return page_ids


def run_seed(db: DatabaseManager):
    """Seed the workspace with the showcase page once."""
    if db.is_seeded():
        logging.info("Workspace already seeded")
        return
    import_pages(db, SeedImporter())
    db.mark_seeded()


def run_list(db: DatabaseManager):
    """Print every page with its preview snippet."""
    for file in db.list_files():
        preview = build_page_preview(file, db.get_page(file.id))
        print(f"{file.id}  {file.title}  ({file.updated_at:%Y-%m-%d})")
        if preview.snippet:
            print(f"    {preview.snippet}")


def run_show(db: DatabaseManager, page_id: str):
    """Print a page as plain text."""
    file = db.get_file(page_id)
    page = db.get_page(page_id)
    if file is None or page is None:
        raise LookupError(f"Page not found: {page_id}")

    print(file.title)
    print("=" * len(file.title))
    print(render_text(page.blocks))


def run_append(db: DatabaseManager, page_id: str, block_type: str, text: str):
    """
    Append a block to a page through the editor, as typing into a new block would.
    """
    page = db.get_page(page_id)
    if page is None:
        raise LookupError(f"Page not found: {page_id}")

    editor = BlockEditor(page.blocks, on_change=lambda blocks: db.update_page(page_id, blocks))
    new_id = editor.insert_block_after(None, block_type)
    if text:
        editor.input_text(new_id, text)
    logging.info(f"Appended {block_type} block {new_id} to page {page_id}")


def run_export(db: DatabaseManager, page_id: str, out_dir: str) -> Path:
    """Write a page to a Markdown file."""
    file = db.get_file(page_id)
    page = db.get_page(page_id)
    if file is None or page is None:
        raise LookupError(f"Page not found: {page_id}")

    out_path = Path(out_dir) / f"{safe_filename(file.title)}.md"
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, 'w', encoding='utf-8') as f:
        f.write(render_markdown(page.blocks))

    logging.info(f"Exported page {page_id} to {out_path}")
    return out_path


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Blockpad - Block-based page editor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py seed                             # Create the showcase page
  python main.py list                             # List pages with snippets
  python main.py new "Meeting notes"              # Create an empty page
  python main.py append PAGE_ID bullet "Buy milk" # Append a block
  python main.py import notes.md todo.md          # Import Markdown files
  python main.py export PAGE_ID --out export      # Export a page to Markdown
        """
    )

    parser.add_argument(
        "--db",
        type=str,
        default=config.database_filename,
        help=f"Path to the database file (default: {config.database_filename})"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Blockpad 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("seed", help="Seed the workspace with the showcase page")
    subparsers.add_parser("list", help="List pages")

    show = subparsers.add_parser("show", help="Print a page as plain text")
    show.add_argument("page_id")

    new = subparsers.add_parser("new", help="Create an empty page")
    new.add_argument("title", nargs="?", default="Untitled")

    append = subparsers.add_parser("append", help="Append a block to a page")
    append.add_argument("page_id")
    append.add_argument("block_type", choices=BLOCK_TYPES)
    append.add_argument("text", nargs="?", default="")

    importer = subparsers.add_parser("import", help="Import Markdown files as pages")
    importer.add_argument("paths", nargs="+")

    export = subparsers.add_parser("export", help="Export a page to Markdown")
    export.add_argument("page_id")
    export.add_argument("--out", default=config.export_directory, help="Output directory")

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging()

    try:
        with DatabaseManager(args.db) as db:
            db.initialize_database()

            if args.command == "seed":
                run_seed(db)
            elif args.command == "list":
                run_list(db)
            elif args.command == "show":
                run_show(db, args.page_id)
            elif args.command == "new":
                print(db.create_page(title=args.title, blocks=[create_default_block("paragraph")]))
            elif args.command == "append":
                run_append(db, args.page_id, args.block_type, args.text)
            elif args.command == "import":
                for page_id in import_pages(db, MarkdownImporter(args.paths)):
                    print(page_id)
            elif args.command == "export":
                print(run_export(db, args.page_id, args.out))

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print("\nInterrupted.")

    except Exception as e:
        logging.error(f"Command '{args.command}' failed: {e}")
        print(f"\nCommand failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
