from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import UnrecognizedImageError
from docx.shared import Cm, Pt

from . import themes
from .highlight import highlight_keywords
from .inline import to_inline
from .model import (
    Block,
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    ImageBlock,
    ListItem,
    Paragraph,
    Space,
)
from .themes import Theme

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = {"http", "https"}


@dataclass
class RenderState:
    theme: Theme
    asset_root: Path | None = None
    images_embedded: int = 0
    images_missing: int = 0


def render_document(
    doc: Document,
    output_path: str | Path,
    asset_root: Path | None = None,
    theme: str = themes.DEFAULT_THEME,
) -> None:
    output_path = Path(output_path)
    state = RenderState(theme=themes.get_theme(theme), asset_root=asset_root)
    docx = DocxDocument()
    themes.apply_page_layout(docx, state.theme)

    for block in doc.blocks:
        _dispatch_block(docx, block, state)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    docx.save(output_path)
    logger.debug(
        "Rendered %d block(s), %d image(s) embedded, %d placeholder(s)",
        len(doc.blocks),
        state.images_embedded,
        state.images_missing,
    )


def _dispatch_block(docx: DocxDocument, block: Block, state: RenderState) -> None:
    if isinstance(block, Heading):
        _render_heading(docx, block, state)
    elif isinstance(block, Paragraph):
        _render_paragraph(docx, block, state)
    elif isinstance(block, ListItem):
        _render_list_item(docx, block, state)
    elif isinstance(block, BlockQuote):
        _render_block_quote(docx, block, state)
    elif isinstance(block, CodeBlock):
        _render_code_block(docx, block, state)
    elif isinstance(block, ImageBlock):
        _render_image_block(docx, block, state)
    elif isinstance(block, Space):
        _render_space(docx)


def _add_inline_runs(paragraph, text: str, state: RenderState, size: int, color, bold: bool = False) -> None:
    theme = state.theme
    for inline in to_inline(text):
        run = paragraph.add_run(inline.text)
        if inline.code:
            themes.set_run_font(run, size=themes.CODE_SIZE_PT, color=theme.text_primary, bold=True)
            themes.shade_run(run, theme.accent)
        else:
            themes.set_run_font(run, size=size, color=color, bold=bold or inline.bold, italic=inline.italic)


def _render_heading(docx: DocxDocument, heading: Heading, state: RenderState) -> None:
    paragraph = docx.add_paragraph()
    themes.apply_block_format(paragraph, space_before=themes.SPACER_HEIGHT_PT)
    _add_inline_runs(
        paragraph,
        heading.text,
        state,
        size=themes.heading_size(heading.level),
        color=state.theme.text_primary,
        bold=True,
    )


def _render_paragraph(docx: DocxDocument, block: Paragraph, state: RenderState) -> None:
    paragraph = docx.add_paragraph()
    themes.apply_block_format(paragraph)
    _add_inline_runs(paragraph, block.text, state, size=themes.BODY_SIZE_PT, color=state.theme.text_secondary)


def _render_list_item(docx: DocxDocument, block: ListItem, state: RenderState) -> None:
    paragraph = docx.add_paragraph()
    themes.apply_block_format(paragraph)
    paragraph.paragraph_format.left_indent = Cm(themes.LIST_INDENT_CM)
    bullet = paragraph.add_run("•  ")
    themes.set_run_font(bullet, color=state.theme.text_primary, bold=True)
    _add_inline_runs(paragraph, block.text, state, size=themes.BODY_SIZE_PT, color=state.theme.text_secondary)


def _render_block_quote(docx: DocxDocument, block: BlockQuote, state: RenderState) -> None:
    paragraph = docx.add_paragraph()
    themes.apply_block_format(paragraph, space_before=4, space_after=4)
    paragraph.paragraph_format.left_indent = Cm(0.5)
    themes.add_left_bar(paragraph, state.theme.text_secondary)
    _add_inline_runs(paragraph, block.text, state, size=themes.BODY_SIZE_PT, color=state.theme.text_secondary)


def _render_code_block(docx: DocxDocument, block: CodeBlock, state: RenderState) -> None:
    theme = state.theme
    if block.language:
        label = docx.add_paragraph()
        themes.apply_block_format(label, space_after=0)
        themes.shade_paragraph(label, theme.code_background)
        run = label.add_run(block.language.upper())
        themes.set_run_font(run, size=themes.LABEL_SIZE_PT, color=theme.code_text, bold=True)

    paragraph = docx.add_paragraph()
    themes.apply_block_format(paragraph)
    themes.shade_paragraph(paragraph, theme.code_background)

    pos = 0
    for keyword in highlight_keywords(block.code, block.language):
        if keyword.start > pos:
            run = paragraph.add_run(block.code[pos : keyword.start])
            themes.set_run_font(run, size=themes.CODE_SIZE_PT, color=theme.code_text)
        run = paragraph.add_run(keyword.keyword)
        themes.set_run_font(run, size=themes.KEYWORD_SIZE_PT, color=theme.background, bold=True)
        pos = keyword.end
    if pos < len(block.code) or not block.code:
        run = paragraph.add_run(block.code[pos:])
        themes.set_run_font(run, size=themes.CODE_SIZE_PT, color=theme.code_text)


def _render_image_block(docx: DocxDocument, block: ImageBlock, state: RenderState) -> None:
    paragraph = docx.add_paragraph()
    themes.apply_block_format(paragraph)
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = paragraph.add_run()

    image_path = _resolve_image_path(block.url, state.asset_root)
    if image_path is not None:
        try:
            run.add_picture(str(image_path))
            state.images_embedded += 1
            return
        except (OSError, UnrecognizedImageError) as exc:
            logger.warning("Could not embed image %s: %s", image_path, exc)
    else:
        logger.warning("Image not available locally: %s", block.url)

    state.images_missing += 1
    placeholder = f"[Image: {block.alt} ({block.url})]" if block.alt else f"[Image: {block.url}]"
    run.add_text(placeholder)
    themes.set_run_font(run, color=state.theme.text_secondary, italic=True)


def _render_space(docx: DocxDocument) -> None:
    spacer = docx.add_paragraph("")
    themes.apply_block_format(spacer, space_after=0)
    spacer.paragraph_format.line_spacing = Pt(themes.SPACER_HEIGHT_PT)


def _resolve_image_path(url: str, asset_root: Path | None) -> Path | None:
    parsed = urlparse(url)
    if parsed.scheme in REMOTE_SCHEMES:
        return None
    if parsed.scheme == "file":
        path = Path(url2pathname(parsed.path))
    else:
        path = Path(url).expanduser()
        if not path.is_absolute() and asset_root is not None:
            path = asset_root / path
    return path if path.is_file() else None
