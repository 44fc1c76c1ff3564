from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


@dataclass(frozen=True)
class Block:
    """Base class for block-level nodes."""


@dataclass(frozen=True)
class Document:
    blocks: Tuple[Block, ...]
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class Heading(Block):
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph(Block):
    text: str


@dataclass(frozen=True)
class ListItem(Block):
    text: str


@dataclass(frozen=True)
class BlockQuote(Block):
    text: str


@dataclass(frozen=True)
class CodeBlock(Block):
    code: str
    language: str = ""


@dataclass(frozen=True)
class ImageBlock(Block):
    url: str
    alt: str = ""


@dataclass(frozen=True)
class Space(Block):
    """Blank line spacer."""


class SpanKind(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"


@dataclass(frozen=True)
class StyledSpan:
    """Half-open ``[start, end)`` range into a display text."""

    start: int
    end: int
    kind: SpanKind


@dataclass(frozen=True)
class ResolvedText:
    display_text: str
    spans: Tuple[StyledSpan, ...] = ()

    def slice(self, span: StyledSpan) -> str:
        return self.display_text[span.start : span.end]


@dataclass(frozen=True)
class InlineText:
    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False


@dataclass(frozen=True)
class KeywordRange:
    start: int
    end: int
    keyword: str
