from __future__ import annotations

import re
from functools import lru_cache
from typing import List

from .model import KeywordRange

KEYWORDS: dict[str, tuple[str, ...]] = {
    "swift": (
        "func", "var", "let", "class", "struct", "enum", "if", "else", "for",
        "while", "return", "import", "guard", "switch", "case",
    ),
    "python": (
        "def", "class", "if", "else", "elif", "for", "while", "return",
        "import", "from", "try", "except",
    ),
    "javascript": (
        "function", "const", "let", "var", "if", "else", "for", "while",
        "return", "import", "export", "class", "async", "await",
    ),
}

LANGUAGE_ALIASES = {
    "js": "javascript",
    "typescript": "javascript",
    "ts": "javascript",
}


def keywords_for(language: str | None) -> tuple[str, ...]:
    tag = (language or "").strip().lower()
    return KEYWORDS.get(LANGUAGE_ALIASES.get(tag, tag), ())


def highlight_keywords(code: str, language: str | None) -> List[KeywordRange]:
    """Find whole-word keyword occurrences in a code block.

    The language tag is matched case-insensitively; keywords themselves are
    case-sensitive. Unknown tags produce no ranges.
    """
    keywords = keywords_for(language)
    if not keywords or not code:
        return []
    pattern = _keyword_pattern(keywords)
    return [KeywordRange(m.start(), m.end(), m.group()) for m in pattern.finditer(code)]


@lru_cache(maxsize=None)
def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern:
    alternatives = "|".join(re.escape(word) for word in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)")
