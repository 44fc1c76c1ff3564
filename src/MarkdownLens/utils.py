from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from . import markdown_parser
from .markdown_parser import HeaderMode
from .model import Document, Paragraph

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str]) -> Path:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem}.docx"
        return out_path
    return input_path.with_suffix(".docx")


def read_markdown(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def load_document(path: Path, header_mode: HeaderMode = HeaderMode.COMPAT) -> Document:
    """Read and segment a markdown file.

    A file that cannot be read or decoded never reaches the parser; the
    result is a one-paragraph document carrying the error message instead.
    """
    try:
        text = read_markdown(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to load %s: %s", path, exc)
        return Document(
            blocks=(Paragraph(text=f"Error loading file: {exc}"),),
            metadata={"source": str(path), "error": True},
        )
    logger.debug("Markdown length: %d chars", len(text))
    return markdown_parser.parse_markdown(text, header_mode=header_mode, metadata={"source": str(path)})
