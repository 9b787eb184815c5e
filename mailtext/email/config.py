"""
Centralised constants for the message-decoding pipeline.

All regex patterns, lookup tables and fixed names live here.
"""

from __future__ import annotations

import re
from typing import Dict, List

# ---------------------------------------------------------------------------
# RFC 2047 encoded words
# ---------------------------------------------------------------------------

# =?charset?encoding?data?=  (charset may carry an RFC 2231 "*lang" suffix)
ENCODED_WORD_RE = re.compile(r"=\?([^?\s]+)\?([bBqQ])\?([^?\s]*)\?=")

# Only linear whitespace may separate two encoded words that are joined
ENCODED_WORD_GAP_RE = re.compile(r"^[ \t\r\n]+$")

# ---------------------------------------------------------------------------
# Content-transfer-encoding names
# ---------------------------------------------------------------------------

QUOTED_PRINTABLE = "quoted-printable"
BASE64 = "base64"

# ---------------------------------------------------------------------------
# HTML reduction
# ---------------------------------------------------------------------------

SCRIPT_BLOCK_RE = re.compile(r"<\s*script[^>]*>[\s\S]*?<\s*/\s*script\s*>", re.IGNORECASE)
STYLE_BLOCK_RE = re.compile(r"<\s*style[^>]*>[\s\S]*?<\s*/\s*style\s*>", re.IGNORECASE)
COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
TAG_RE = re.compile(r"<[^>]*>")

NBSP = "\u00a0"

# ---------------------------------------------------------------------------
# Body normalisation
# ---------------------------------------------------------------------------

BLANK_LINE_RE = re.compile(r"^[^\S\n]+$", re.MULTILINE)
# Four or more newlines == three or more blank lines; keep two blank lines
EXCESS_NEWLINES_RE = re.compile(r"\n{4,}")
MAX_NEWLINE_RUN = "\n\n\n"

# ---------------------------------------------------------------------------
# MIME structure
# ---------------------------------------------------------------------------

# First line of a header block must look like "Name: value"
HEADER_LINE_RE = re.compile(rb"^[!-9;-~]+[ \t]*:")
HEADER_BODY_SEPARATORS = (b"\r\n\r\n", b"\n\n")

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"
MULTIPART_PREFIX = "multipart/"

# ---------------------------------------------------------------------------
# Relative time formatting (locale independent names)
# ---------------------------------------------------------------------------

MONTH_ABBR: List[str] = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

WEEKDAY_ABBR: List[str] = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

MONTH_MAP: Dict[str, int] = {name: idx + 1 for idx, name in enumerate(MONTH_ABBR)}

# ---------------------------------------------------------------------------
# Email header Date fallback patterns
# ---------------------------------------------------------------------------

HEADER_DATE_PATTERNS: List[str] = [
    r"(\d{1,2})\s+(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+(\d{4})",
    r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})",
]
