"""Shared character classes, keyword lists and page selectors."""

import re

# ----------------------
# Title normalization
# ----------------------
EMOJI_PATTERN = re.compile(
    "["
    "\U0001F000-\U0001FAFF"  # pictographs, emoticons, transport, flags
    "\U000E0000-\U000E007F"  # tag characters (flag sequences)
    "\u2300-\u23FF"  # misc technical (watches, media controls)
    "\u2600-\u27BF"  # misc symbols and dingbats
    "\u2B00-\u2BFF"  # stars, arrows, squares
    "\u3030\u303D\u3297\u3299"
    "\u20E3"  # keycap
    "\uFE00-\uFE0F"  # variation selectors
    "]+"
)

INVISIBLE_PATTERN = re.compile(
    "["
    "\x00-\x1F\x7F-\x9F"  # C0/C1 controls
    "\u00A0\u00AD\u034F\u061C\u115F\u1160\u1680\u180E"
    "\u2000-\u200F"  # exotic spaces, zero-width, direction marks
    "\u2028-\u202F"
    "\u205F-\u206F"
    "\u3000\u3164\uFEFF\uFFA0"
    "]"
)

DASH_PATTERN = re.compile("[\u2010-\u2015\u2212\u2E3A\u2E3B\uFE58\uFE63\uFF0D]")

BAR_PATTERN = re.compile("[\uFF5C\u2502\u2503\u2223\u01C0\u00A6]")

BRACKET_TRANSLATION = str.maketrans({
    "【": "[",
    "】": "]",
    "『": "[",
    "』": "]",
    "〖": "[",
    "〗": "]",
    "［": "[",
    "］": "]",
    "（": "(",
    "）": ")",
})

FLUFF_KEYWORDS = [
    "official",
    "mv",
    "m/v",
    "music",
    "nmv",
    "lyric",
    "lyrics",
    "video",
    "live",
    "subs",
    "clean",
    "version",
    "ver",
    "pinyin",
    "karaoke",
    "4k",
    "1080p",
    "uhd",
    "performance",
    "promotion",
]

# ASCII boundaries so that CJK text glued to a keyword ("官方MV") still matches
FLUFF_PATTERN = re.compile(
    r"(?<![A-Za-z0-9])(?:"
    + "|".join(
        re.escape(k) for k in sorted(FLUFF_KEYWORDS, key=len, reverse=True)
    )
    + r")(?![A-Za-z0-9])\.?",
    re.IGNORECASE,
)

# ----------------------
# Title parsing
# ----------------------
CORNER_OPEN = "「『"
CORNER_CLOSE = "」』"

QUOTE_GLYPHS = "\"“”„‟«»＂"

LATIN_LETTER = re.compile(r"[A-Za-z\u00C0-\u024F]")

# ----------------------
# Structured metadata
# ----------------------
CJK_COMPATIBILITY_IDEOGRAPHS = re.compile("[\uF900-\uFAFF]")

# ----------------------
# Watch page selectors
# ----------------------
ATTRIBUTION_SELECTORS = [
    # (container, song heading, artist heading)
    ("yt-video-attribute-view-model", "h1", "h4"),
    ("ytd-video-description-music-section-renderer", "#title", "#subtitle"),
]

DESCRIPTION_EXPANDER_SELECTOR = "ytd-text-inline-expander#description-inline-expander"
EXPANDED_ATTRIBUTE = "is-expanded"

CHANNEL_SUFFIXES = [
    " - Topic",
    "VEVO",
    "Official Channel",
    "Official",
]
