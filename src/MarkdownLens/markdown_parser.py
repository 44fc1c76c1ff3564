from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Any, List, Sequence

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

logger = logging.getLogger(__name__)

FENCE = "```"
MAX_HEADING_LEVEL = 6
BULLET_MARKERS = ("- ", "* ", "+ ")
QUOTE_MARKER = "> "

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_NUMBERED_ITEM = re.compile(r"[0-9]+\. ")
_IMAGE = re.compile(r'!\[(?P<alt>[^\]]*)\]\((?P<url>[^\s)]+)(?:\s+"(?P<title>[^"]*)")?\)')


class HeaderMode(str, Enum):
    """How the text of a heading line is cut after its ``#`` run.

    ``COMPAT`` drops the run plus exactly one character whatever it is, so
    ``#Title`` yields ``itle``. ``LENIENT`` drops the run and at most one
    following space.
    """

    COMPAT = "compat"
    LENIENT = "lenient"


def parse_markdown(
    text: str,
    header_mode: HeaderMode = HeaderMode.COMPAT,
    metadata: dict[str, Any] | None = None,
) -> Document:
    return Document(blocks=tuple(segment(text, header_mode=header_mode)), metadata=metadata)


def segment(document: str, header_mode: HeaderMode = HeaderMode.COMPAT) -> List[Block]:
    """Split a markdown document into blocks, one pass over its lines.

    Every line produces exactly one block except fenced code, where the
    fences and everything between them collapse into a single CodeBlock.
    Unterminated fences run to the end of input. Nothing here raises on bad
    markup; unrecognised lines become paragraphs.
    """
    lines = _LINE_BREAK.split(document)
    blocks: List[Block] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        trimmed = line.strip()
        if trimmed.startswith(FENCE):
            code_block, i = _parse_fence(lines, i)
            blocks.append(code_block)
            continue
        blocks.append(_classify_line(line, trimmed, header_mode))
        i += 1
    logger.debug("Segmented %d line(s) into %d block(s)", len(lines), len(blocks))
    return blocks


def _parse_fence(lines: Sequence[str], index: int) -> tuple[CodeBlock, int]:
    language = lines[index].strip()[len(FENCE) :].strip()
    code_lines: list[str] = []
    i = index + 1
    while i < len(lines) and not lines[i].strip().startswith(FENCE):
        code_lines.append(lines[i])
        i += 1
    if i >= len(lines):
        logger.debug("Unterminated code fence opened on line %d", index + 1)
    # skip the closing fence
    return CodeBlock(code="\n".join(code_lines), language=language), i + 1


def _classify_line(line: str, trimmed: str, header_mode: HeaderMode) -> Block:
    if trimmed.startswith("#"):
        return _parse_heading(trimmed, header_mode)
    if trimmed.startswith(BULLET_MARKERS):
        return ListItem(text=trimmed[2:])
    numbered = _NUMBERED_ITEM.match(trimmed)
    if numbered:
        return ListItem(text=trimmed[numbered.end() :])
    if trimmed.startswith(QUOTE_MARKER):
        return BlockQuote(text=trimmed[len(QUOTE_MARKER) :])
    image = _IMAGE.fullmatch(trimmed)
    if image:
        return ImageBlock(url=image.group("url"), alt=image.group("alt"))
    if not trimmed:
        return Space()
    return Paragraph(text=line)


def _parse_heading(trimmed: str, header_mode: HeaderMode) -> Heading:
    run = len(trimmed) - len(trimmed.lstrip("#"))
    level = max(1, min(run, MAX_HEADING_LEVEL))
    if header_mode is HeaderMode.LENIENT:
        text = trimmed[run:]
        if text.startswith(" "):
            text = text[1:]
    else:
        text = trimmed[level + 1 :]
    return Heading(level=level, text=text)
