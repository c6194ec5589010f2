"""
Title normalization: strip visual noise from a displayed video title.

The pipeline runs in a fixed order and every stage is total, so any string
comes out as *some* normalized string. Running the pipeline on its own
output returns it unchanged.

Stages:
1. Drop emoji and pictographic symbols
2. Turn zero-width, control and exotic whitespace into plain spaces
3. Unify dash variants to "-"
4. Unify vertical-bar glyphs to "|"
5. Turn lenticular / white-corner / fullwidth brackets into "[ ]"
   (corner quotes 「」 are kept for the parser)
6. Turn "( )" pairs into "[ ]"
7. Drop bracketed spans that mention a fluff keyword
8. Drop standalone fluff keywords
9. Strip trailing slashes
10. Collapse doubled hyphens and space every separator hyphen as " - "
11. Collapse whitespace and trim
"""

import re

from .constants import (
    BAR_PATTERN,
    BRACKET_TRANSLATION,
    DASH_PATTERN,
    EMOJI_PATTERN,
    FLUFF_PATTERN,
    INVISIBLE_PATTERN,
)

PAREN_PAIR = re.compile(r"\(([^()]*)\)")
BRACKET_SPAN = re.compile(r"\[([^\[\]]*)\]")
TRAILING_SLASH = re.compile(r"(?:\s*/)+\s*$")
DOUBLED_HYPHEN = re.compile(r"-(?:\s*-)+")
SEPARATOR_HYPHEN = re.compile(r"\s+-\s*|\s*-\s+")
WHITESPACE_RUN = re.compile(r"\s+")


def strip_emoji(text: str) -> str:
    return EMOJI_PATTERN.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Map invisible characters to spaces and squeeze runs of whitespace."""
    text = INVISIBLE_PATTERN.sub(" ", text)
    return WHITESPACE_RUN.sub(" ", text)


def unify_glyphs(text: str) -> str:
    """Unify dashes, divider bars and CJK bracket styles."""
    text = DASH_PATTERN.sub("-", text)
    text = BAR_PATTERN.sub("|", text)
    return text.translate(BRACKET_TRANSLATION)


def parentheses_to_brackets(text: str) -> str:
    # Innermost pairs first so nested parentheses convert fully
    while True:
        text, count = PAREN_PAIR.subn(r"[\1]", text)
        if not count:
            return text


def remove_fluff(text: str) -> str:
    """Drop fluff-keyword bracket spans, then fluff keywords left outside them."""

    def _drop_span(match: re.Match) -> str:
        return " " if FLUFF_PATTERN.search(match.group(1)) else match.group(0)

    text = BRACKET_SPAN.sub(_drop_span, text)
    return FLUFF_PATTERN.sub(" ", text)


def tidy_separators(text: str) -> str:
    text = TRAILING_SLASH.sub("", text)
    text = DOUBLED_HYPHEN.sub("-", text)
    return SEPARATOR_HYPHEN.sub(" - ", text)


def normalize(raw: str) -> str:
    """Normalize a raw title for structural pattern matching."""
    if not raw:
        return ""

    text = strip_emoji(raw)
    text = collapse_whitespace(text)
    text = unify_glyphs(text)
    text = parentheses_to_brackets(text)
    text = remove_fluff(text)
    text = tidy_separators(text)
    return WHITESPACE_RUN.sub(" ", text).strip()
