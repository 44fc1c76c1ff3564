from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import groupby
from typing import Iterable, List, Sequence

from .model import InlineText, ResolvedText, SpanKind, StyledSpan

BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
CODE_PATTERN = re.compile(r"`([^`]+)`")
ITALIC_PATTERN = re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)")

# Highest first. A character claimed by an earlier kind is never restyled.
PRECEDENCE = (SpanKind.CODE, SpanKind.BOLD, SpanKind.ITALIC)

_MASK = " "


@dataclass(frozen=True)
class _Match:
    kind: SpanKind
    start: int
    end: int
    content_start: int
    content_end: int

    @classmethod
    def from_regex(cls, kind: SpanKind, match: re.Match) -> "_Match":
        return cls(kind, match.start(), match.end(), match.start(1), match.end(1))

    def markers(self) -> Iterable[int]:
        yield from range(self.start, self.content_start)
        yield from range(self.content_end, self.end)

    def covers(self, pos: int) -> bool:
        return self.start <= pos < self.end


def resolve(text: str) -> ResolvedText:
    """Strip bold, italic and inline-code markers and report styled ranges.

    Span offsets refer to the returned display text. Inline code is found
    first; bold whose markers fall inside a code span is dropped and italic
    is searched with code spans blanked out, so backtick content is always
    literal. Where retained matches nest, each character keeps the style of
    the highest-precedence match covering it and the spans never overlap.
    """
    if "*" not in text and "`" not in text:
        return ResolvedText(display_text=text)

    matches = _locate(text)
    if not matches:
        return ResolvedText(display_text=text)

    stripped = {pos for match in matches for pos in match.markers()}
    display_index, display_text = _strip_markers(text, stripped)
    owners = _claim_characters(len(text), matches)

    spans: List[StyledSpan] = []
    for match in matches:
        spans.extend(_match_spans(match, owners, stripped, display_index))
    spans.sort(key=lambda span: (span.start, span.end))
    return ResolvedText(display_text=display_text, spans=tuple(spans))


def to_inline(text: str) -> List[InlineText]:
    """Flatten a resolved line into consecutive styled runs."""
    resolved = resolve(text)
    styles: list[SpanKind | None] = [None] * len(resolved.display_text)
    for span in resolved.spans:
        for idx in range(span.start, span.end):
            styles[idx] = span.kind

    runs: List[InlineText] = []
    pos = 0
    for kind, group in groupby(styles):
        length = len(list(group))
        chunk = resolved.display_text[pos : pos + length]
        runs.append(
            InlineText(
                chunk,
                bold=kind is SpanKind.BOLD,
                italic=kind is SpanKind.ITALIC,
                code=kind is SpanKind.CODE,
            )
        )
        pos += length
    return runs


def _locate(text: str) -> List[_Match]:
    code = [_Match.from_regex(SpanKind.CODE, m) for m in CODE_PATTERN.finditer(text)]
    bold = [
        match
        for match in (_Match.from_regex(SpanKind.BOLD, m) for m in BOLD_PATTERN.finditer(text))
        if not any(span.covers(pos) for pos in match.markers() for span in code)
    ]
    masked = _mask(text, code)
    italic = [_Match.from_regex(SpanKind.ITALIC, m) for m in ITALIC_PATTERN.finditer(masked)]
    return code + bold + italic


def _mask(text: str, spans: Sequence[_Match]) -> str:
    if not spans:
        return text
    chars = list(text)
    for span in spans:
        chars[span.start : span.end] = _MASK * (span.end - span.start)
    return "".join(chars)


def _strip_markers(text: str, stripped: set[int]) -> tuple[list[int], str]:
    index = [0] * len(text)
    kept: list[str] = []
    delta = 0
    for pos, char in enumerate(text):
        if pos in stripped:
            delta += 1
            continue
        index[pos] = pos - delta
        kept.append(char)
    return index, "".join(kept)


def _claim_characters(length: int, matches: Sequence[_Match]) -> list[SpanKind | None]:
    owners: list[SpanKind | None] = [None] * length
    for kind in reversed(PRECEDENCE):
        for match in matches:
            if match.kind is kind:
                owners[match.content_start : match.content_end] = [kind] * (
                    match.content_end - match.content_start
                )
    return owners


def _match_spans(
    match: _Match,
    owners: Sequence[SpanKind | None],
    stripped: set[int],
    display_index: Sequence[int],
) -> List[StyledSpan]:
    spans: List[StyledSpan] = []
    start: int | None = None
    end = 0
    for pos in range(match.content_start, match.content_end):
        if pos in stripped:
            continue
        if owners[pos] is match.kind:
            if start is None:
                start = display_index[pos]
            end = display_index[pos] + 1
        elif start is not None:
            spans.append(StyledSpan(start, end, match.kind))
            start = None
    if start is not None:
        spans.append(StyledSpan(start, end, match.kind))
    return spans
