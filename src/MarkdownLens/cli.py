from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from . import renderer_docx, themes
from .config import load_config
from .markdown_parser import HeaderMode
from .model import (
    Block,
    BlockQuote,
    CodeBlock,
    Heading,
    ImageBlock,
    ListItem,
    Paragraph,
    Space,
)
from .recent_files import RecentFiles
from .utils import configure_logging, load_document, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markdownlens",
        description="Parse a Markdown file and export it as a themed DOCX.",
    )
    parser.add_argument("input", type=str, nargs="?", help="Path to Markdown file")
    parser.add_argument("-o", "--output", type=str, help="Output DOCX path")
    theme_names = ", ".join(f"{key} ({theme.name})" for key, theme in sorted(themes.THEMES.items()))
    parser.add_argument("--theme", choices=sorted(themes.THEMES), help=f"Colour theme: {theme_names}")
    parser.add_argument("--config", type=str, help="YAML config file")
    parser.add_argument(
        "--header-mode",
        choices=[mode.value for mode in HeaderMode],
        help="How heading text is cut after the '#' run",
    )
    parser.add_argument("--dump", action="store_true", help="Print parsed blocks instead of rendering")
    parser.add_argument("--recent", action="store_true", help="List recently opened files and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    config = load_config(Path(args.config).expanduser() if args.config else None)
    if args.theme:
        config = replace(config, theme=args.theme)
    if args.header_mode:
        config = replace(config, header_mode=HeaderMode(args.header_mode))

    recent = None
    if config.recent_file is not None:
        recent = RecentFiles(config.recent_file, limit=config.max_recent).load()

    if args.recent:
        _print_recent(recent)
        return
    if args.input is None:
        parser.error("the following arguments are required: input")

    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    logging.info("Reading %s", input_path)
    document = load_document(input_path, header_mode=config.header_mode)
    if recent is not None and not (document.metadata or {}).get("error"):
        recent.add(input_path)
        recent.save()

    if args.dump:
        for block in document.blocks:
            print(describe_block(block))
        return

    output_path = resolve_output_path(input_path, args.output)
    logging.info("Rendering DOCX to %s", output_path)
    renderer_docx.render_document(
        document,
        output_path=output_path,
        asset_root=input_path.parent,
        theme=config.theme,
    )
    logging.info("Done. Saved to %s", output_path)


def describe_block(block: Block) -> str:
    if isinstance(block, Heading):
        return f"heading[{block.level}] {block.text}"
    if isinstance(block, Paragraph):
        return f"paragraph {block.text}"
    if isinstance(block, ListItem):
        return f"item {block.text}"
    if isinstance(block, BlockQuote):
        return f"quote {block.text}"
    if isinstance(block, CodeBlock):
        lines = block.code.count("\n") + 1 if block.code else 0
        return f"code[{block.language}] {lines} line(s)"
    if isinstance(block, ImageBlock):
        return f"image {block.url} alt={block.alt!r}"
    if isinstance(block, Space):
        return "space"
    return type(block).__name__.lower()


def _print_recent(recent: RecentFiles | None) -> None:
    if recent is None:
        logging.warning("No recent-files store configured (set recent_file in the config).")
        return
    if not recent.entries:
        print("No recent files.")
        return
    for entry in recent.entries:
        print(f"{entry.opened_at:%Y-%m-%d %H:%M}  {entry.name}  {entry.path}")


if __name__ == "__main__":
    main()
