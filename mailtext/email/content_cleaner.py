"""
Content cleaning and normalisation for email bodies.

Responsibilities:
- Reduce HTML to its visible text (tags removed, entities unescaped).
- Canonicalise line endings, collapse blank-line runs, trim the result.
"""

from __future__ import annotations

import html as _html

from mailtext.email.config import (
    BLANK_LINE_RE,
    COMMENT_RE,
    EXCESS_NEWLINES_RE,
    MAX_NEWLINE_RUN,
    NBSP,
    SCRIPT_BLOCK_RE,
    STYLE_BLOCK_RE,
    TAG_RE,
)


class ContentCleaner:
    """Stateless utilities for cleaning / normalising email body text."""

    # ------------------------------------------------------------------
    # HTML → text
    # ------------------------------------------------------------------

    @staticmethod
    def strip_html_to_text(html_text: str) -> str:
        """Convert HTML to text by removing tags and unescaping entities.

        Tags are removed without a replacement character, so adjacent
        block elements run together (``<div>a</div><div>b</div>`` -> ``ab``).
        Spacing is left to :meth:`normalize_body`.
        """
        if not html_text:
            return ""
        text = SCRIPT_BLOCK_RE.sub("", html_text)
        text = STYLE_BLOCK_RE.sub("", text)
        text = COMMENT_RE.sub("", text)
        text = TAG_RE.sub("", text)
        text = _html.unescape(text)
        return text.replace(NBSP, " ")

    # ------------------------------------------------------------------
    # Body normalisation
    # ------------------------------------------------------------------

    @staticmethod
    def normalize_body(text: str) -> str:
        """Canonicalise *text* for display.

        - ``\\r\\n`` and bare ``\\r`` become ``\\n``
        - whitespace-only lines count as blank
        - three or more blank lines collapse to two
        - leading/trailing whitespace of the whole text is trimmed
        """
        if not text:
            return ""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = BLANK_LINE_RE.sub("", text)
        text = EXCESS_NEWLINES_RE.sub(MAX_NEWLINE_RUN, text)
        return text.strip()


def strip_html(html_text: str) -> str:
    return ContentCleaner.strip_html_to_text(html_text)


def normalize_body(text: str) -> str:
    return ContentCleaner.normalize_body(text)
